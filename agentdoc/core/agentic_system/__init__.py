"""Agentic components built on LangChain."""
