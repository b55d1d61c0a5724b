# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente isolado: banco em memória e estado global limpo a cada teste
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variáveis de ambiente e reinicia o estado global."""
    import app_state
    from config import reload_config

    env_vars = {
        "QUIZ_DB_PATH": ":memory:",
        "ADMIN_NAME": "admin",
        "QUIZ_CODE_LENGTH": "6",
        "QUIZ_CODE_MAX_RETRIES": "5",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        reload_config()
        app_state.reset_state()
        yield
        app_state.reset_state()
