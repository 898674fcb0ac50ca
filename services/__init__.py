"""Services built on the grade scale engine."""
