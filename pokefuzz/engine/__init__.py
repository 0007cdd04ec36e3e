"""Battle execution backends."""
