"""
Leitura e validação do arquivo de objetos para rastreamento em lote.

Formato: um código de objeto por linha (ex: AB123456789BR).
Os códigos são agrupados em lotes de no máximo 1000.
"""
import logging
import re
from typing import List, Sequence

from services.errors import ValidationError


PADRAO_OBJETO = re.compile(r"^[A-Za-z]{2}\d{9}[A-Za-z]{2}$", re.ASCII)
TAMANHO_LOTE = 1000

logger = logging.getLogger(__name__)


def validar_padrao(objetos: Sequence[str]) -> None:
    """
    Valida cada código contra o padrão 2 letras + 9 dígitos + 2 letras.

    Raises:
        ValidationError: no primeiro código fora do padrão
    """
    for codigo in objetos:
        # fullmatch: "$" aceitaria um "\n" final
        if not PADRAO_OBJETO.fullmatch(codigo):
            raise ValidationError(codigo)


def dividir_em_lotes(codigos: Sequence[str], tamanho: int = TAMANHO_LOTE) -> List[List[str]]:
    """
    Divide os códigos em lotes de até `tamanho`, preservando a ordem.

    Cada lote é validado antes de ser aceito; um código inválido aborta
    a divisão inteira.
    """
    if tamanho <= 0:
        raise ValueError("tamanho do lote deve ser positivo")

    lotes = []
    for inicio in range(0, len(codigos), tamanho):
        lote = list(codigos[inicio:inicio + tamanho])
        validar_padrao(lote)
        lotes.append(lote)
    return lotes


def ler_arquivo(caminho: str) -> List[List[str]]:
    """
    Lê o arquivo de objetos e devolve os códigos em lotes validados.

    A quebra de linha final não gera linha vazia; linhas em branco no meio
    do arquivo são tratadas como códigos inválidos.

    Args:
        caminho: Caminho do arquivo texto (UTF-8)

    Returns:
        list: Lotes de códigos (máximo 1000 por lote)

    Raises:
        OSError: arquivo inexistente ou ilegível
        ValidationError: linha fora do padrão
    """
    with open(caminho, 'r', encoding='utf-8') as f:
        linhas = f.read().splitlines()

    lotes = dividir_em_lotes(linhas)
    logger.info(f"Arquivo {caminho}: {len(linhas)} objetos em {len(lotes)} lote(s)")
    return lotes
