from typing import List
from unittest.mock import MagicMock


def executed_statements(engine: MagicMock) -> List[str]:
    """Statements passed to exec_driver_sql on an engine mock"""
    connection = engine.begin.return_value.__enter__.return_value
    return [call.args[0] for call in connection.exec_driver_sql.call_args_list]
