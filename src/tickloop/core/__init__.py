"""Time sources and ports shared by the scheduler and its embedders."""
