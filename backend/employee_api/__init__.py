"""Employee API — layered REST service for employee records."""
