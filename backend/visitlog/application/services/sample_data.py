"""Sample visits inserted into an empty store outside production."""

import logging

from visitlog.application.services.visit_service import VisitService

logger = logging.getLogger(__name__)

SAMPLE_VISITS: tuple[dict[str, str], ...] = (
    {
        "name": "Maria Silva",
        "professional": "Dr. João Santos",
        "visitDate": "2025-01-15",
        "category": "Psychological",
        "notes": "Primeira consulta - ansiedade",
    },
    {
        "name": "Carlos Oliveira",
        "professional": "Profª Ana Costa",
        "visitDate": "2025-01-16",
        "category": "Pedagogical",
        "notes": "Dificuldades de aprendizagem",
    },
    {
        "name": "Fernanda Lima",
        "professional": "Ass. Social Paula",
        "visitDate": "2025-01-17",
        "category": "SocialAssistance",
        "notes": "Orientação sobre benefícios",
    },
    {
        "name": "Roberto Mendes",
        "professional": "Dr. João Santos",
        "visitDate": "2025-01-18",
        "category": "Psychological",
        "notes": "Acompanhamento de depressão",
    },
    {
        "name": "Juliana Souza",
        "professional": "Profª Ana Costa",
        "visitDate": "2025-01-19",
        "category": "Pedagogical",
        "notes": "Avaliação pedagógica",
    },
)


async def seed_sample_visits(service: VisitService) -> int:
    """Insert the sample visits when the store is empty. Idempotent.

    Returns the number of visits inserted.
    """
    if not await service.is_empty():
        logger.debug("Store already has visits, skipping sample data")
        return 0

    for data in SAMPLE_VISITS:
        await service.create(data)
    logger.info("Seeded %d sample visits", len(SAMPLE_VISITS))
    return len(SAMPLE_VISITS)
