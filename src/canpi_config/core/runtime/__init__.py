"""canpi-config: Runtime file (core).

Leitura e escrita do arquivo de runtime `key=value`:
 - parsing estrito com número de linha nos erros
 - resultado "ausente" distinto de erro de parsing
 - serialização determinística na ordem das definições
"""

from .errors import ParseError, RuntimeFileError  # noqa: F401
from .reader import RawEntry, iter_raw_entries, parse_runtime_text, read_runtime_file  # noqa: F401
from .writer import write_runtime_file, write_runtime_text  # noqa: F401
