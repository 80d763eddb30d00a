"""
Módulo de utilitários genéricos.

Contém:
- logger: Configuração de logging
- http_client: Cliente HTTP com pool de conexões
- excel_generator: Exportação de eventos para Excel
- sanitizer: Sanitização de logs e corpos de resposta
"""
