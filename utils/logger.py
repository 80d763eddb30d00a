"""
Configuração de logging para o projeto.

Configura logging para arquivo e console.
"""
import os
import logging
from datetime import datetime
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(log_name: str, logs_dir: Optional[str] = None, level: int = logging.INFO) -> str:
    """
    Configura logging para arquivo e console.

    - Handler de arquivo: logs/{log_name}_{timestamp}_pid{pid}.log
    - Handler de console: stderr
    - Formato: %(asctime)s - %(levelname)s - %(message)s

    Args:
        log_name: Nome base do arquivo de log (sem extensão)
        logs_dir: Pasta dos logs (padrão: logs/ na raiz do projeto)
        level: Nível de log (padrão INFO)

    Returns:
        str: Caminho do arquivo de log
    """
    if logs_dir is None:
        logs_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'logs')
    os.makedirs(logs_dir, exist_ok=True)

    timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
    log_filepath = os.path.join(logs_dir, f"{log_name}_{timestamp}_pid{os.getpid()}.log")

    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remover handlers antigos para evitar duplicação
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # urllib3 loga cada conexão nova em DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.info(f"Log sendo salvo em: {log_filepath}")
    return log_filepath
