"""In-memory URL shortener with expiring links and click analytics."""
