"""NewTube video hosting backend."""
