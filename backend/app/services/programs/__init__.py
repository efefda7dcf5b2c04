"""Programme catalogue services."""
