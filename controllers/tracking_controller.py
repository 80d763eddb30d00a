# -*- coding: utf-8 -*-
"""
Controller de Rastreamento de Objetos.

Orquestra a execução em lote conforme RASTRO_MODO:
- sync: rastreia os objetos do arquivo, lote a lote
- async: registra cada lote e registra no log o número do recibo
- recibo: busca o resultado de um recibo (RASTRO_RECIBO)
"""
import logging
from typing import List, Optional, Union

from models.tracking_file_reader import ler_arquivo
from models.tracking_result import Resultado, ResultadoAsync
from services.errors import ConfigError
from services.rastro_api import RastroClient, criar_cliente
from utils.excel_generator import gerar_excel_eventos
from config.settings import (
    get_arquivo_objetos,
    get_filtro_resultado,
    get_modo,
    get_recibo,
    is_dry_run,
    is_excel_export_enabled
)


MODOS = ("sync", "async", "recibo")


def run(cliente: Optional[RastroClient] = None) -> List[Union[Resultado, ResultadoAsync]]:
    """
    Executa o processo de rastreamento no modo configurado.

    Args:
        cliente: Cliente já construído (padrão: criado a partir do .env)

    Returns:
        list: Resultados (sync/recibo) ou recibos (async) obtidos

    Raises:
        ConfigError: modo, arquivo ou recibo não configurados
        RastroError: qualquer falha da API (sem retry)
    """
    modo = get_modo()
    if modo not in MODOS:
        raise ConfigError(f"RASTRO_MODO inválido: {modo!r} (use {', '.join(MODOS)})")

    logging.info(f"Iniciando rastreamento (modo: {modo})")

    if is_dry_run():
        return _simular(modo)

    proprio_cliente = cliente is None
    if proprio_cliente:
        cliente = criar_cliente()

    try:
        if modo == "sync":
            resultados = _rastrear_sync(cliente)
        elif modo == "async":
            resultados = _registrar_async(cliente)
        else:
            resultados = [_buscar_recibo(cliente)]
    finally:
        if proprio_cliente:
            cliente.close()

    if modo != "async" and is_excel_export_enabled():
        gerar_excel_eventos(resultados)

    logging.info("Processo concluído com sucesso!")
    return resultados


def _lotes_do_arquivo() -> List[List[str]]:
    arquivo = get_arquivo_objetos()
    if not arquivo:
        raise ConfigError("RASTRO_ARQUIVO_OBJETOS não configurado no .env")
    return ler_arquivo(arquivo)


def _rastrear_sync(cliente: RastroClient) -> List[Resultado]:
    filtro = get_filtro_resultado()
    resultados = []

    for i, lote in enumerate(_lotes_do_arquivo(), start=1):
        logging.info(f"Lote {i}: rastreando {len(lote)} objeto(s)")
        resultado = cliente.rastreia(lote, resultado=filtro)
        for objeto in resultado.objetos:
            evento = objeto.ultimo_evento
            if evento is None:
                logging.warning(f"{objeto.codigo_objeto}: sem eventos")
            else:
                logging.info(
                    f"{objeto.codigo_objeto}: {evento.descricao} "
                    f"({evento.data_hora}, {evento.unidade.nome})"
                )
        resultados.append(resultado)

    return resultados


def _registrar_async(cliente: RastroClient) -> List[ResultadoAsync]:
    recibos = []

    for i, lote in enumerate(_lotes_do_arquivo(), start=1):
        recibo = cliente.rastreia_async(lote)
        logging.info(
            f"Lote {i}: {recibo.qtd_objetos} objeto(s) registrados, "
            f"recibo {recibo.numero} (válido até {recibo.dt_validade})"
        )
        recibos.append(recibo)

    return recibos


def _buscar_recibo(cliente: RastroClient) -> Resultado:
    recibo = get_recibo()
    if not recibo:
        raise ConfigError("RASTRO_RECIBO não configurado no .env")

    resultado = cliente.recibo(recibo)
    logging.info(f"Recibo {recibo}: {len(resultado.objetos)} objeto(s)")
    return resultado


def _simular(modo: str) -> list:
    """Modo DRY_RUN: valida as entradas e registra o que seria enviado."""
    if modo == "recibo":
        logging.info(f"[DRY_RUN] GET <base>{get_recibo()}")
        return []

    lotes = _lotes_do_arquivo()
    metodo = "GET" if modo == "sync" else "POST"
    for i, lote in enumerate(lotes, start=1):
        logging.info(f"[DRY_RUN] Lote {i}: {metodo} com {len(lote)} objeto(s)")
    return []
