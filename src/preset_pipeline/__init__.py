"""AI-assisted work-breakdown preset generation pipeline."""
