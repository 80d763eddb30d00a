"""
Módulo de serviços e integrações externas.

Contém:
- rastro_api: Cliente da API de rastreamento (sync, async, recibo)
- errors: Exceções do cliente
"""
