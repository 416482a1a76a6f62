"""Developer helpers for inspecting parsed programs."""
