"""
Estruturas de resultado da API de rastreamento.

Converte o JSON de resposta em dataclasses imutáveis. Qualquer divergência de
schema vira DecodeError.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from services.errors import DecodeError


def _campo_str(dados: dict, chave: str, origem: str) -> str:
    valor = dados.get(chave, "")
    if valor is None:
        return ""
    if not isinstance(valor, str):
        raise DecodeError(f"{origem}.{chave}: esperado string, recebido {type(valor).__name__}")
    return valor


def _campo_lista(dados: dict, chave: str, origem: str) -> list:
    valor = dados.get(chave)
    if valor is None:
        return []
    if not isinstance(valor, list):
        raise DecodeError(f"{origem}.{chave}: esperado lista, recebido {type(valor).__name__}")
    return valor


def _exigir_dict(dados: Any, origem: str) -> dict:
    if not isinstance(dados, dict):
        raise DecodeError(f"{origem}: esperado objeto JSON, recebido {type(dados).__name__}")
    return dados


@dataclass(frozen=True)
class Unidade:
    """Unidade (agência, centro de tratamento) associada a um evento."""

    nome: str = ""
    codigo_sro: str = ""
    mcu: str = ""
    se: str = ""

    @classmethod
    def from_dict(cls, dados: Any) -> "Unidade":
        dados = _exigir_dict(dados if dados is not None else {}, "unidade")
        return cls(
            nome=_campo_str(dados, "nome", "unidade"),
            codigo_sro=_campo_str(dados, "codSro", "unidade"),
            mcu=_campo_str(dados, "codMcu", "unidade"),
            se=_campo_str(dados, "se", "unidade"),
        )


@dataclass(frozen=True)
class Evento:
    codigo: str = ""
    tipo: str = ""
    descricao: str = ""
    data_hora: str = ""
    unidade: Unidade = field(default_factory=Unidade)

    @classmethod
    def from_dict(cls, dados: Any) -> "Evento":
        dados = _exigir_dict(dados, "evento")
        return cls(
            codigo=_campo_str(dados, "codigo", "evento"),
            tipo=_campo_str(dados, "tipo", "evento"),
            descricao=_campo_str(dados, "descricao", "evento"),
            data_hora=_campo_str(dados, "dtHrCriado", "evento"),
            unidade=Unidade.from_dict(dados.get("unidade")),
        )


@dataclass(frozen=True)
class Objeto:
    codigo_objeto: str = ""
    eventos: Tuple[Evento, ...] = ()

    @classmethod
    def from_dict(cls, dados: Any) -> "Objeto":
        dados = _exigir_dict(dados, "objeto")
        return cls(
            codigo_objeto=_campo_str(dados, "codObjeto", "objeto"),
            eventos=tuple(Evento.from_dict(e) for e in _campo_lista(dados, "eventos", "objeto")),
        )

    @property
    def ultimo_evento(self) -> Optional[Evento]:
        """A API devolve os eventos do mais recente para o mais antigo."""
        return self.eventos[0] if self.eventos else None


@dataclass(frozen=True)
class Resultado:
    """Resultado de rastreamento (síncrono ou por recibo)."""

    objetos: Tuple[Objeto, ...] = ()

    @classmethod
    def from_dict(cls, dados: Any) -> "Resultado":
        dados = _exigir_dict(dados, "resultado")
        return cls(
            objetos=tuple(Objeto.from_dict(o) for o in _campo_lista(dados, "objetos", "resultado")),
        )

    def codigos(self) -> List[str]:
        return [o.codigo_objeto for o in self.objetos]

    def para_linhas(self) -> List[dict]:
        """
        Achata o resultado em uma linha por evento (usado na exportação Excel).

        Objetos sem eventos geram uma linha com os campos de evento vazios.
        """
        linhas = []
        for objeto in self.objetos:
            if not objeto.eventos:
                linhas.append({"OBJETO": objeto.codigo_objeto})
                continue
            for evento in objeto.eventos:
                linhas.append({
                    "OBJETO": objeto.codigo_objeto,
                    "CODIGO": evento.codigo,
                    "TIPO": evento.tipo,
                    "DESCRICAO": evento.descricao,
                    "DATAHORA": evento.data_hora,
                    "UNIDADE": evento.unidade.nome,
                    "SRO": evento.unidade.codigo_sro,
                    "MCU": evento.unidade.mcu,
                    "SE": evento.unidade.se,
                })
        return linhas


@dataclass(frozen=True)
class ResultadoAsync:
    """Recibo de registro de rastreamento assíncrono."""

    user: str = ""
    numero: str = ""
    dt_criacao: str = ""
    dt_validade: str = ""
    qtd_objetos: int = 0
    resultado: str = ""
    idioma: str = ""

    @classmethod
    def from_dict(cls, dados: Any) -> "ResultadoAsync":
        dados = _exigir_dict(dados, "resultadoAsync")
        qtd = dados.get("qtdObjetos", 0)
        if qtd is None:
            qtd = 0
        # bool é subclasse de int
        if isinstance(qtd, bool) or not isinstance(qtd, int):
            raise DecodeError(f"resultadoAsync.qtdObjetos: esperado inteiro, recebido {qtd!r}")
        return cls(
            user=_campo_str(dados, "user", "resultadoAsync"),
            numero=_campo_str(dados, "numero", "resultadoAsync"),
            dt_criacao=_campo_str(dados, "dtCriacao", "resultadoAsync"),
            dt_validade=_campo_str(dados, "dtValidade", "resultadoAsync"),
            qtd_objetos=qtd,
            resultado=_campo_str(dados, "resultado", "resultadoAsync"),
            idioma=_campo_str(dados, "idioma", "resultadoAsync"),
        )
