"""Log type definitions loaded from YAML."""
