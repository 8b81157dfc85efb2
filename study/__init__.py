"""AI study assistant: LLM-backed summaries and terminal flashcards."""
