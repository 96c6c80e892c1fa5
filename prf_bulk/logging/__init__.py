"""Application logging setup and run message accumulation."""
