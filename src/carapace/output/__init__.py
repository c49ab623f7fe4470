"""Report renderers for intake results."""
