"""Domain services: storage, documents, assistant, chat, dashboard."""
