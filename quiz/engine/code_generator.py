"""Quiz Code Generator - Códigos curtos para compartilhar quizzes."""

import secrets
import string


class QuizCodeGenerator:
    """Gera códigos alfanuméricos maiúsculos (ex: ``AB12CD``).

    O gerador não consulta o store: colisões são detectadas pela restrição
    UNIQUE e o ``QuizService`` tenta novamente com outro código.

    Example:
        >>> generator = QuizCodeGenerator()
        >>> code = generator.generate()
        >>> len(code)
        6
    """

    DEFAULT_LENGTH = 6
    ALPHABET = string.ascii_uppercase + string.digits

    def __init__(self, length: int = DEFAULT_LENGTH, alphabet: str = ALPHABET):
        if length < 1:
            raise ValueError(f"Tamanho de código inválido: {length}")
        if not alphabet:
            raise ValueError("Alfabeto vazio")
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        """Retorna um novo código aleatório."""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
