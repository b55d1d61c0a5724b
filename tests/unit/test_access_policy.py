# =============================================================================
# TESTES - Quiz Access Policy
# =============================================================================
# Testes unitários para autorização por nome (criador ou admin)
# =============================================================================


class TestCanDelete:
    """Testes para exclusão de quiz."""

    def test_creator_can_delete(self, sample_quiz):
        """Criador pode excluir."""
        from quiz.engine.access_policy import QuizAccessPolicy

        assert QuizAccessPolicy().can_delete(sample_quiz, "Sara") is True

    def test_admin_can_delete(self, sample_quiz):
        """Admin pode excluir qualquer quiz."""
        from quiz.engine.access_policy import QuizAccessPolicy

        assert QuizAccessPolicy().can_delete(sample_quiz, "admin") is True

    def test_other_user_cannot_delete(self, sample_quiz):
        """Outro usuário não pode excluir."""
        from quiz.engine.access_policy import QuizAccessPolicy

        assert QuizAccessPolicy().can_delete(sample_quiz, "Bob") is False

    def test_comparison_is_case_sensitive(self, sample_quiz):
        """Comparação de nomes e exata."""
        from quiz.engine.access_policy import QuizAccessPolicy

        policy = QuizAccessPolicy()

        assert policy.can_delete(sample_quiz, "sara") is False
        assert policy.can_delete(sample_quiz, "ADMIN") is False

    def test_empty_requester_denied(self, sample_quiz):
        """Nome vazio ou ausente nunca autoriza."""
        from quiz.engine.access_policy import QuizAccessPolicy

        policy = QuizAccessPolicy()

        assert policy.can_delete(sample_quiz, "") is False
        assert policy.can_delete(sample_quiz, None) is False

    def test_custom_admin_name(self, sample_quiz):
        """Sentinela de admin configurável."""
        from quiz.engine.access_policy import QuizAccessPolicy

        policy = QuizAccessPolicy(admin_name="moderador")

        assert policy.can_delete(sample_quiz, "moderador") is True
        assert policy.can_delete(sample_quiz, "admin") is False


class TestCanViewAnalytics:
    """Testes para visualização de estatísticas."""

    def test_creator_and_admin_allowed(self, sample_quiz):
        """Criador e admin veem estatísticas."""
        from quiz.engine.access_policy import QuizAccessPolicy

        policy = QuizAccessPolicy()

        assert policy.can_view_analytics(sample_quiz, "Sara") is True
        assert policy.can_view_analytics(sample_quiz, "admin") is True

    def test_other_user_denied(self, sample_quiz):
        """Outros usuários não veem estatísticas."""
        from quiz.engine.access_policy import QuizAccessPolicy

        assert QuizAccessPolicy().can_view_analytics(sample_quiz, "Bob") is False
