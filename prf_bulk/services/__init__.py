"""Pipeline stages and orchestration."""
