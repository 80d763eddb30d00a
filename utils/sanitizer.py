"""
Sanitização de dados sensíveis para logs e mensagens de erro.

Previne vazamento do token Bearer em logs e limita corpos de resposta
anexados às exceções.
"""
from typing import Any, Dict, List, Union


SENSITIVE_KEYS = [
    'password', 'token', 'secret', 'api_key', 'authorization',
    'access_token', 'refresh_token', 'bearer',
    'apikey', 'api-key', 'senha', 'credencial'
]


def sanitize_for_log(data: Union[Dict, List, Any]) -> Union[Dict, List, Any]:
    """
    Remove dados sensíveis antes de logar.

    Substitui valores de chaves sensíveis (ex: header Authorization)
    por '***REDACTED***'.

    Args:
        data: Dicionário, lista ou valor a ser sanitizado

    Returns:
        Dados sanitizados (mesma estrutura, valores sensíveis removidos)
    """
    if isinstance(data, dict):
        return {
            k: '***REDACTED***' if any(s in str(k).lower() for s in SENSITIVE_KEYS) else sanitize_for_log(v)
            for k, v in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize_for_log(item) for item in data]
    return data


def sanitize_response_body(body: str, max_length: int = 200) -> str:
    """
    Reduz o corpo de uma resposta HTTP a um trecho curto.

    Colapsa quebras de linha e limita tamanho, para anexar em RemoteError.

    Args:
        body: Corpo da resposta (texto)
        max_length: Tamanho máximo do trecho

    Returns:
        Trecho sanitizado ("" se corpo vazio)
    """
    if not body:
        return ""

    trecho = ' '.join(body.split())

    if len(trecho) > max_length:
        trecho = trecho[:max_length] + '...'

    return trecho
