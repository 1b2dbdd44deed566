"""Signed webhooks from the identity provider and the media pipeline."""
