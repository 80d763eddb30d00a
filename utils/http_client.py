"""
Cliente HTTP com pool de conexões e timeout.

Fornece sessão HTTP configurada com:
- Pool de conexões grande (padrão 1000 por host)
- Sem retry automático (falhas são reportadas uma única vez)
- Verificação TLS configurável
- User-Agent identificável
- Timeout obrigatório
"""
import logging

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


POOL_SIZE_PADRAO = 1000
TIMEOUT_PADRAO = 30

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Cliente HTTP com pool de conexões, timeout e User-Agent.

    Configuração:
    - Pool: pool_connections = pool_maxsize = pool_size
    - Retry: desabilitado (Retry(total=0))
    - TLS: verify_tls=False reproduz o comportamento do serviço de referência
    - User-Agent: rastro/1.0
    """

    def __init__(
        self,
        pool_size: int = POOL_SIZE_PADRAO,
        verify_tls: bool = True,
        timeout: float = TIMEOUT_PADRAO,
    ):
        self.timeout = timeout
        self.session = requests.Session()

        # Sem retry: o chamador decide se e quando repetir
        retry = Retry(total=0, connect=0, read=0, redirect=0, status=0, raise_on_status=False)

        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=retry
        )

        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({
            'User-Agent': 'rastro/1.0'
        })

        self.session.verify = verify_tls
        if not verify_tls:
            # Opt-out explícito: a API de referência roda com certificado não verificado
            logger.warning("Verificação de certificado TLS DESABILITADA (RASTRO_VERIFICAR_TLS=false)")
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def request(self, method: str, url: str, timeout: float = None, **kwargs) -> requests.Response:
        """Requisição com timeout obrigatório (padrão da instância)."""
        return self.session.request(
            method,
            url,
            timeout=timeout if timeout is not None else self.timeout,
            **kwargs
        )

    def close(self) -> None:
        """Libera as conexões do pool."""
        self.session.close()
