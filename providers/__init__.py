"""LLM providers for complexity analysis."""
