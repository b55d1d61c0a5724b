"""Quiz Access Policy - Quem pode excluir um quiz e ver estatísticas."""

from ..models.schemas import Quiz

DEFAULT_ADMIN_NAME = "admin"


class QuizAccessPolicy:
    """Autorização baseada no nome do solicitante.

    O criador e identificado apenas pelo nome digitado ao criar o quiz, e o
    admin autenticado e representado pelo sentinela ``admin`` enviado pelo
    cliente. Quem souber o nome do criador consegue excluir o quiz.
    """

    def __init__(self, admin_name: str = DEFAULT_ADMIN_NAME):
        self.admin_name = admin_name

    def is_owner_or_admin(self, quiz: Quiz, requester_name: str | None) -> bool:
        if not requester_name:
            return False
        return requester_name == quiz.creator_name or requester_name == self.admin_name

    def can_delete(self, quiz: Quiz, requester_name: str | None) -> bool:
        """Criador ou admin podem excluir."""
        return self.is_owner_or_admin(quiz, requester_name)

    def can_view_analytics(self, quiz: Quiz, requester_name: str | None) -> bool:
        """Criador ou admin podem ver estatísticas das tentativas."""
        return self.is_owner_or_admin(quiz, requester_name)
