"""Proxy de webhooks do Alertmanager -> Discord.

Este pacote contém:
- constants: cores, limites e textos fixos
- config: configuração imutável lida do ambiente / linha de comando
- models: payloads de entrada (Alertmanager/Prometheus) e mensagens de saída
- utils: formatação de valores, durações e timestamps
- detection: severidade/cor e detecção do tipo de payload
- formatters: renderização de cada alerta em embed
- batching: divisão dos embeds em mensagens do Discord
- services: envio para o webhook do Discord
- controller: criação do Flask app e pipeline de cada request
- server: ponto de entrada do processo
"""
