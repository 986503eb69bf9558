"""Database connection and collection schemas."""
