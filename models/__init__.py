"""
Módulo de modelos.

Contém:
- tracking_result: Resultado, Objeto, Evento, Unidade, ResultadoAsync
- tracking_file_reader: Leitura e validação do arquivo de objetos
"""
