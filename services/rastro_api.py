"""
Integração com a API de Rastreamento de objetos.

Responsável por montar as requisições autenticadas (Bearer), enviar pelo pool
HTTP compartilhado e decodificar as respostas em Resultado / ResultadoAsync.

Nenhuma operação faz retry: erros sobem para o chamador.
"""
import json
import logging
from typing import Iterable, List, Optional, Union
from urllib.parse import quote, urlencode

import requests

from models.tracking_result import Resultado, ResultadoAsync
from services.errors import ConfigError, DecodeError, RemoteError, TransportError
from utils.http_client import POOL_SIZE_PADRAO, TIMEOUT_PADRAO, HTTPClient
from utils.sanitizer import sanitize_for_log, sanitize_response_body
from config.settings import (
    get_url_base,
    get_token,
    is_tls_verification_enabled,
    get_timeout,
    get_pool_size
)


logger = logging.getLogger(__name__)

FILTRO_ULTIMO_EVENTO = "U"

# Erros do requests na montagem da requisição (URL ou header), antes de qualquer I/O
_ERROS_DE_MONTAGEM = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.URLRequired,
    requests.exceptions.InvalidHeader,
)


class RastroClient:
    """
    Cliente da API de rastreamento.

    A construção apenas monta a configuração (sem I/O, sem validação).
    O token informado aqui é só um padrão: toda operação aceita `token`
    e o valor por chamada tem precedência.

    Todas as requisições levam o header `Connection: close`, mesmo com o
    pool grande; o pool continua útil para reaproveitar a configuração TLS
    e limitar conexões simultâneas por host.
    """

    def __init__(
        self,
        url_base: str,
        token: str = "",
        verify_tls: bool = True,
        pool_size: int = POOL_SIZE_PADRAO,
        timeout: float = TIMEOUT_PADRAO,
    ):
        self.url_base = url_base
        self.token = token
        self.http_client = HTTPClient(pool_size=pool_size, verify_tls=verify_tls, timeout=timeout)

    def __enter__(self) -> "RastroClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.http_client.close()

    # ------------------------------------------------------------------
    # Operações públicas
    # ------------------------------------------------------------------

    def rastreia(
        self,
        objetos: Union[str, Iterable[str]],
        token: Optional[str] = None,
        resultado: str = FILTRO_ULTIMO_EVENTO,
        timeout: Optional[float] = None,
    ) -> Resultado:
        """
        Rastreamento síncrono de um ou mais objetos.

        GET <base>?resultado=<filtro>&codigosObjetos=<c1>&codigosObjetos=<c2>...

        Args:
            objetos: Lista de códigos ou string separada por vírgulas
            token: Token Bearer (padrão: token do construtor)
            resultado: Filtro de um caractere ("U" = último evento)
            timeout: Timeout desta chamada em segundos

        Returns:
            Resultado: Objetos e eventos decodificados (HTTP 200)

        Raises:
            ConfigError, TransportError, RemoteError, DecodeError
        """
        codigos = _normalizar_codigos(objetos)
        if len(resultado) != 1:
            raise ConfigError(f"filtro de resultado deve ter um caractere: {resultado!r}")

        params = [("resultado", resultado)] + [("codigosObjetos", c) for c in codigos]
        url = f"{self.url_base}?{urlencode(params)}"

        response = self._do_req("GET", url, token, timeout=timeout)
        return self._decodificar(response, 200, Resultado, "erro ao rastrear o objeto")

    def rastreia_objeto(
        self,
        codigo: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Resultado:
        """
        Rastreamento síncrono de um único objeto (forma com sufixo no path).

        GET <base><codigo>?resultado=U
        """
        url = f"{self.url_base}{codigo}?resultado={FILTRO_ULTIMO_EVENTO}"
        response = self._do_req("GET", url, token, timeout=timeout)
        return self._decodificar(response, 200, Resultado, "erro ao rastrear o objeto")

    def rastreia_async(
        self,
        objetos: Union[str, Iterable[str]],
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ResultadoAsync:
        """
        Registra um lote de objetos para rastreamento assíncrono.

        POST <base> com corpo JSON ["AB123456789BR", ...]. Espera HTTP 202.
        Aceita lista ou string separada por vírgulas, como `rastreia`.
        O número do recibo retornado é usado depois em `recibo()`.
        """
        corpo = json.dumps(_normalizar_codigos(objetos))
        response = self._do_req("POST", self.url_base, token, body=corpo, timeout=timeout)
        return self._decodificar(
            response, 202, ResultadoAsync, "erro ao registrar objetos para rastro"
        )

    def recibo(
        self,
        recibo: str,
        token: Optional[str] = None,
        escapar: bool = False,
        timeout: Optional[float] = None,
    ) -> Resultado:
        """
        Busca o resultado de um rastreamento assíncrono pelo número do recibo.

        GET <base><recibo>. Por padrão o recibo é concatenado sem escape:
        deve chegar já seguro para URL. Com escapar=True é aplicado
        percent-encoding (inclusive em '/').
        """
        sufixo = quote(recibo, safe="") if escapar else recibo
        response = self._do_req("GET", self.url_base + sufixo, token, timeout=timeout)
        return self._decodificar(response, 200, Resultado, "erro ao rastrear o objeto")

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _resolver_token(self, token: Optional[str]) -> str:
        token = token if token else self.token
        if not token:
            raise ConfigError("token Bearer não informado (nem na chamada, nem no cliente)")
        return token

    def _do_req(
        self,
        method: str,
        url: str,
        token: Optional[str],
        body: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        headers = {
            "Authorization": f"Bearer {self._resolver_token(token)}",
            "Connection": "close",
        }
        if method == "POST":
            headers["Content-Type"] = "application/json"

        logger.info(f"{method} {url}")
        logger.debug(f"Headers: {sanitize_for_log(headers)}")

        try:
            return self.http_client.request(method, url, headers=headers, data=body, timeout=timeout)
        except _ERROS_DE_MONTAGEM as e:
            raise ConfigError(f"rastro doreq: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Erro de conexão com API de rastreamento: {e}")
            raise TransportError(f"rastro doreq: {e}") from e

    def _decodificar(self, response: requests.Response, status_esperado: int, modelo, mensagem: str):
        try:
            status_line = f"{response.status_code} {response.reason or ''}".strip()
            logger.info(f"RESPONSE STATUS: {status_line}")

            if response.status_code != status_esperado:
                trecho = sanitize_response_body(response.text or "")
                logger.error(f"HTTP {status_line} (esperado {status_esperado}): {trecho}")
                raise RemoteError(
                    f"{mensagem}: {status_line}",
                    status_code=response.status_code,
                    reason=status_line,
                    body=trecho,
                )

            try:
                dados = response.json()
            except ValueError as e:
                raise DecodeError(f"rastro decode: {e}") from e

            return modelo.from_dict(dados)
        finally:
            response.close()


def _normalizar_codigos(objetos: Union[str, Iterable[str]]) -> List[str]:
    """Aceita "c1,c2" ou ["c1", "c2"]; remove espaços e itens vazios."""
    if isinstance(objetos, str):
        objetos = objetos.split(",")
    codigos = [c.strip() for c in objetos if c and c.strip()]
    if not codigos:
        raise ConfigError("nenhum código de objeto informado")
    return codigos


def criar_cliente() -> RastroClient:
    """
    Cria o cliente a partir das variáveis de ambiente (config/settings.py).

    Raises:
        ConfigError: RASTRO_URL_BASE não configurado
    """
    url_base = get_url_base()
    if not url_base:
        raise ConfigError("RASTRO_URL_BASE não configurado no .env")

    return RastroClient(
        url_base,
        token=get_token(),
        verify_tls=is_tls_verification_enabled(),
        pool_size=get_pool_size(),
        timeout=get_timeout(),
    )
