"""Document loaders producing timeline items."""
