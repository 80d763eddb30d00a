# -*- coding: utf-8 -*-
"""
Rastro: rastreamento de objetos em lote via API de rastreamento.

Fluxo:
1. Ler arquivo de objetos (um código por linha) e validar o padrão
2. Dividir em lotes de até 1000 objetos
3. Rastrear (sync), registrar lotes (async) ou buscar um recibo
4. Exportar eventos para Excel (opcional)

Configuração em config/.env (ver config/settings.py).
"""
import logging
import os
import sys
from dotenv import load_dotenv
from utils.logger import setup_logger
from services.errors import RastroError
from controllers.tracking_controller import run


# ==============================================================================
# CONFIGURAÇÃO INICIAL
# ==============================================================================

# Carregar variáveis de ambiente
dotenv_path = os.path.join('config', '.env')
load_dotenv(dotenv_path=dotenv_path)

# Configurar logging
setup_logger("rastro")


# ==============================================================================
# ENTRY POINT
# ==============================================================================

if __name__ == "__main__":
    try:
        run()
    except RastroError as e:
        logging.error(f"{type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logging.exception(f"Erro fatal: {e}")
        sys.exit(1)
