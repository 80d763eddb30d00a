"""
Exceções do cliente de rastreamento.

Todas herdam de RastroError para que o chamador possa capturar a família inteira.
"""
from typing import Optional


class RastroError(Exception):
    """Erro base do cliente de rastreamento."""


class ConfigError(RastroError):
    """Requisição mal formada (URL inválida, token ausente, filtro inválido)."""


class TransportError(RastroError):
    """Falha de rede: DNS, conexão recusada, timeout, TLS."""


class RemoteError(RastroError):
    """
    Resposta HTTP recebida com status inesperado para a operação.

    Attributes:
        status_code: Código HTTP recebido
        reason: Linha de status (ex: "404 Not Found")
        body: Trecho truncado do corpo da resposta
    """

    def __init__(self, mensagem: str, status_code: int, reason: str, body: str = ""):
        super().__init__(mensagem)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(RastroError):
    """Status esperado, mas corpo não é JSON válido ou não segue o schema."""


class ValidationError(RastroError):
    """Código de objeto fora do padrão (leitura de arquivo em lote)."""

    def __init__(self, codigo: str, mensagem: Optional[str] = None):
        super().__init__(mensagem or f"{codigo}: objeto fora do padrão")
        self.codigo = codigo
