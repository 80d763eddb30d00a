# -*- coding: utf-8 -*-
"""
Testes do cliente contra um servidor HTTP local (http.server em thread).

Diferente de test_rastro_api.py, aqui a requisição passa pelo HTTPAdapter real:
headers enviados de fato, corpo do POST e falha de conexão verdadeira.
"""
import json
import socket
import sys
import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import requests

from services.errors import DecodeError, RemoteError, TransportError
from services.rastro_api import RastroClient


TOKEN = "tok-local"

RESPOSTA_RASTRO = {
    "objetos": [
        {
            "codObjeto": "AB123456789BR",
            "eventos": [
                {
                    "codigo": "BDE", "tipo": "01", "descricao": "Objeto entregue ao destinatário",
                    "dtHrCriado": "2024-01-10T14:32:00",
                    "unidade": {"nome": "CDD Centro", "codSro": "70002970", "codMcu": "00001234", "se": "DF"}
                }
            ]
        }
    ]
}

RESPOSTA_ASYNC = {
    "user": "u1", "numero": "R1", "dtCriacao": "2024-01-01", "dtValidade": "2024-02-01",
    "qtdObjetos": 2, "resultado": "ok", "idioma": "pt"
}


class _Handler(BaseHTTPRequestHandler):
    """Registra cada requisição em server.requisicoes e responde conforme o path."""

    def log_message(self, format, *args):
        pass

    def _registrar(self, corpo=b""):
        self.server.requisicoes.append({
            "method": self.command,
            "path": self.path,
            "headers": {k.lower(): v for k, v in self.headers.items()},
            "body": corpo,
        })

    def _responder(self, status, corpo):
        if not isinstance(corpo, bytes):
            corpo = json.dumps(corpo).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(corpo)))
        self.end_headers()
        self.wfile.write(corpo)

    def do_GET(self):
        self._registrar()
        if self.path.endswith("/nao-existe"):
            self._responder(404, b"<html>not found</html>")
        elif self.path.endswith("/quebrado"):
            self._responder(200, b"{objetos: [")
        else:
            self._responder(200, RESPOSTA_RASTRO)

    def do_POST(self):
        tamanho = int(self.headers.get("Content-Length", 0))
        self._registrar(self.rfile.read(tamanho))
        self._responder(202, RESPOSTA_ASYNC)


@pytest.fixture
def servidor():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.requisicoes = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield httpd, f"http://127.0.0.1:{httpd.server_address[1]}/objetos/"
    finally:
        httpd.shutdown()
        httpd.server_close()


def _porta_fechada() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_rastreia_envia_headers_reais(servidor):
    httpd, url_base = servidor

    with RastroClient(url_base, token=TOKEN, timeout=5) as cliente:
        resultado = cliente.rastreia(["AB123456789BR", "CD987654321BR"])

    assert resultado.objetos[0].ultimo_evento.codigo == "BDE"
    requisicao = httpd.requisicoes[0]
    assert requisicao["method"] == "GET"
    assert requisicao["path"] == (
        "/objetos/?resultado=U&codigosObjetos=AB123456789BR&codigosObjetos=CD987654321BR"
    )
    assert requisicao["headers"]["authorization"] == "Bearer tok-local"
    assert requisicao["headers"]["connection"] == "close"
    assert requisicao["headers"]["user-agent"] == "rastro/1.0"
    assert "content-type" not in requisicao["headers"]


def test_rastreia_async_envia_corpo_json(servidor):
    httpd, url_base = servidor

    with RastroClient(url_base, timeout=5) as cliente:
        recibo = cliente.rastreia_async(["AB123456789BR", "CD987654321BR"], token=TOKEN)

    assert recibo.numero == "R1"
    assert recibo.qtd_objetos == 2
    requisicao = httpd.requisicoes[0]
    assert requisicao["method"] == "POST"
    assert requisicao["path"] == "/objetos/"
    assert requisicao["headers"]["content-type"] == "application/json"
    assert requisicao["headers"]["connection"] == "close"
    assert json.loads(requisicao["body"]) == ["AB123456789BR", "CD987654321BR"]


def test_recibo_path_concatenado(servidor):
    httpd, url_base = servidor

    with RastroClient(url_base, token=TOKEN, timeout=5) as cliente:
        cliente.recibo("R1")

    assert httpd.requisicoes[0]["path"] == "/objetos/R1"


def test_status_inesperado_real(servidor):
    _, url_base = servidor

    with RastroClient(url_base, token=TOKEN, timeout=5) as cliente:
        with pytest.raises(RemoteError) as exc_info:
            cliente.recibo("nao-existe")

    assert exc_info.value.status_code == 404
    assert exc_info.value.body == "<html>not found</html>"


def test_json_invalido_real(servidor):
    _, url_base = servidor

    with RastroClient(url_base, token=TOKEN, timeout=5) as cliente:
        with pytest.raises(DecodeError):
            cliente.recibo("quebrado")


def test_conexao_recusada_gera_transport_error():
    url_base = f"http://127.0.0.1:{_porta_fechada()}/objetos/"

    with RastroClient(url_base, token=TOKEN, timeout=5) as cliente:
        with pytest.raises(TransportError) as exc_info:
            cliente.recibo("R1")

    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
