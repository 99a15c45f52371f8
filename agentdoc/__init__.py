"""AgentDoc: document ingestion and grounded RAG chat."""
