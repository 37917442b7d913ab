"""Output sinks for task side effects."""
