"""Domain services: the frontmatter codec, prompt templates, ingestion and writing."""
