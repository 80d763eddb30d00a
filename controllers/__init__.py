"""Controllers de orquestração do processo de rastreamento."""
