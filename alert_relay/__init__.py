"""Pacote do relay de alertas Alertmanager/Grafana -> gateway de mensagens.

Este pacote contém:
- constants: variáveis de ambiente e valores padrão
- errors: hierarquia de erros e status HTTP associados
- models: modelos pydantic dos payloads de entrada e da mensagem de saída
- detection: decodificação e detecção do schema do payload
- formatters: formatação das linhas de texto por variante
- services: envio da mensagem ao gateway (com pausa)
- utils: helpers de logging e do marcador de pausa
- controller: criação do Flask app e endpoints
"""
