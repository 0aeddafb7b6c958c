# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Coloca a raiz do repositorio no path (server.py e o pacote coursequiz)
# =============================================================================

import sys
from pathlib import Path

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))
