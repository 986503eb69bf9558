"""HTTP routes and application entry point."""
