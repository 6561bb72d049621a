"""Customer-support outbound conversation pipeline."""
