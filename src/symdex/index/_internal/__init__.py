"""Internal building blocks of the symbol index. Use ``symdex.index`` instead."""
