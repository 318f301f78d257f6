"""
Configuration for ClinIQ Vault.

Covers:
- OpenAI model settings for the department assistant
- Blob-store backend selection (file / redis / memory)
- The two fixed blob keys for documents and chat sessions
- LangSmith tracing settings (observability)
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "ClinIQ Vault"
    app_version: str = "1.0.0"
    debug: bool = False

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.1
    max_tokens: int = 1500

    # Blob store
    storage_backend: str = "file"  # file | redis | memory
    storage_dir: str = "data/vault"
    documents_key: str = "cliniq_vault_docs"
    sessions_key: str = "cliniq_vault_chats"

    # Redis (only used by the redis backend)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0

    # LangSmith (observability)
    langsmith_api_key: str = ""
    langsmith_project: str = "cliniq-vault"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_url: str = "http://localhost:8000"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

# Enable LangSmith tracing if API key is provided
if settings.langsmith_api_key:
    import os
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGCHAIN_API_KEY"] = settings.langsmith_api_key
    os.environ["LANGCHAIN_PROJECT"] = settings.langsmith_project
