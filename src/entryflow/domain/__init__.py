"""Domain layer: entry model, error taxonomy, ports and the entry-import pipeline."""
