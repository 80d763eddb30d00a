# -*- coding: utf-8 -*-
"""
Teste: Geração de Excel com os eventos de rastreamento.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pandas as pd

from models.tracking_result import Resultado
from utils.excel_generator import COLUNAS, gerar_excel_eventos


RESPOSTA = {
    "objetos": [
        {
            "codObjeto": "AB123456789BR",
            "eventos": [
                {
                    "codigo": "BDE", "tipo": "01", "descricao": "Objeto entregue ao destinatário",
                    "dtHrCriado": "2024-01-10T14:32:00",
                    "unidade": {"nome": "CDD Centro", "codSro": "70002970", "codMcu": "00001234", "se": "DF"}
                },
                {
                    "codigo": "PO", "tipo": "01", "descricao": "Objeto postado",
                    "dtHrCriado": "2024-01-08T09:00:00",
                    "unidade": {"nome": "AC Asa Sul", "codSro": "70300970", "codMcu": "00005678", "se": "DF"}
                }
            ]
        },
        {"codObjeto": "CD987654321BR", "eventos": []}
    ]
}


def test_excel_generation(tmp_path):
    """Uma linha por evento; objeto sem eventos gera uma linha vazia."""
    resultado = Resultado.from_dict(RESPOSTA)

    caminho = gerar_excel_eventos([resultado], output_dir=str(tmp_path))

    assert os.path.exists(caminho)
    assert caminho.endswith(".xlsx")

    df = pd.read_excel(caminho, sheet_name="Eventos", dtype=str)
    assert list(df.columns) == COLUNAS
    assert len(df) == 3
    assert list(df["OBJETO"]) == ["AB123456789BR", "AB123456789BR", "CD987654321BR"]
    assert df.iloc[0]["DESCRICAO"] == "Objeto entregue ao destinatário"
    assert df.iloc[1]["SRO"] == "70300970"
    assert pd.isna(df.iloc[2]["CODIGO"])
