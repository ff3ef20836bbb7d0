from typing import List, Sequence

from .constants import MAX_DISCORD_EMBEDS
from .models import OutboundMessage, RenderedUnit


def batch_units(
    units: Sequence[RenderedUnit],
    header: str,
    capacity: int = MAX_DISCORD_EMBEDS,
) -> List[OutboundMessage]:
    """
    Divide os embeds em mensagens de no máximo `capacity` itens, mantendo a ordem.
    Um grupo sem alertas ainda gera uma mensagem (só com o cabeçalho).
    """
    if capacity < 1:
        raise ValueError("capacity must be at least 1")
    if not units:
        return [OutboundMessage(content=header)]
    return [
        OutboundMessage(content=header, embeds=list(units[i:i + capacity]))
        for i in range(0, len(units), capacity)
    ]
