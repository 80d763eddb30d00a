"""
Centralização de variáveis de ambiente.

Fornece helpers para acessar variáveis de ambiente de forma type-safe.
Os valores são carregados de config/.env pelo main.py (python-dotenv).
"""
import os


def _get_bool(nome: str, padrao: str = "false") -> bool:
    return os.getenv(nome, padrao).strip().lower() in ("true", "1", "sim", "yes")


# API de rastreamento
def get_url_base() -> str:
    """Retorna a URL base da API de rastreamento (RASTRO_URL_BASE)."""
    return os.getenv("RASTRO_URL_BASE", "")


def get_token() -> str:
    """Retorna o token Bearer padrão (RASTRO_TOKEN)."""
    return os.getenv("RASTRO_TOKEN", "")


def is_tls_verification_enabled() -> bool:
    """
    Verifica se a verificação de certificado TLS está habilitada.

    Padrão false: a API de referência é acessada com verificação desligada.
    """
    return _get_bool("RASTRO_VERIFICAR_TLS", "false")


def get_timeout() -> float:
    """Retorna o timeout (segundos) de cada requisição."""
    return float(os.getenv("RASTRO_TIMEOUT", "30"))


def get_pool_size() -> int:
    """Retorna o tamanho do pool de conexões por host."""
    return int(os.getenv("RASTRO_POOL_SIZE", "1000"))


def get_filtro_resultado() -> str:
    """Retorna o filtro de resultado ("U" = apenas último evento, "T" = todos)."""
    return os.getenv("RASTRO_RESULTADO", "U")


# Execução em lote
def get_arquivo_objetos() -> str:
    """Retorna o caminho do arquivo com um código de objeto por linha."""
    return os.getenv("RASTRO_ARQUIVO_OBJETOS", "")


def get_modo() -> str:
    """Retorna o modo de execução: sync, async ou recibo."""
    return os.getenv("RASTRO_MODO", "sync").strip().lower()


def get_recibo() -> str:
    """Retorna o número do recibo a consultar no modo recibo."""
    return os.getenv("RASTRO_RECIBO", "")


def is_excel_export_enabled() -> bool:
    """Verifica se os eventos devem ser exportados para Excel."""
    return _get_bool("RASTRO_EXPORTAR_EXCEL")


# Flags de Desenvolvimento
def is_dry_run() -> bool:
    """Verifica se está em modo DRY_RUN (sem chamadas reais à API)."""
    return _get_bool("DRY_RUN")
