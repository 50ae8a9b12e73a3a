"""Backend for the portfolio site: LLM Q&A with provider fallback, bot checks, contact relay."""
