"""
Geração de arquivos Excel com os eventos de rastreamento.
"""
import os
import logging
from datetime import datetime
from typing import Iterable, Optional
import pandas as pd

from models.tracking_result import Resultado


COLUNAS = ["OBJETO", "CODIGO", "TIPO", "DESCRICAO", "DATAHORA", "UNIDADE", "SRO", "MCU", "SE"]


def gerar_excel_eventos(resultados: Iterable[Resultado], output_dir: Optional[str] = None) -> str:
    """
    Gera arquivo Excel com uma linha por evento rastreado.

    Filename: Rastreamento YYYYMMDD_HHMMSS.xlsx

    Args:
        resultados: Resultados retornados pela API
        output_dir: Pasta de saída (padrão: raiz do projeto)

    Returns:
        str: Path completo do arquivo Excel gerado
    """
    linhas = []
    for resultado in resultados:
        linhas.extend(resultado.para_linhas())

    df = pd.DataFrame(linhas, columns=COLUNAS)

    filename = f"Rastreamento {datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    if output_dir is None:
        output_dir = os.path.join(os.path.dirname(__file__), '..')
    output_path = os.path.join(output_dir, filename)

    with pd.ExcelWriter(output_path, engine='xlsxwriter') as writer:
        df.to_excel(writer, sheet_name='Eventos', index=False)

    logging.info(f"Excel gerado: {output_path} ({len(df)} eventos)")
    return output_path
