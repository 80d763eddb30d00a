"""Configuração via variáveis de ambiente."""
