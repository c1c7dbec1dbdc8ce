"""Mr Cars admin dashboard service."""
