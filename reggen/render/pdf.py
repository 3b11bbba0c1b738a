from ..config import Settings
from ..utils.logger import get_logger

from contextlib import contextmanager
from pathlib import Path
import re
import subprocess
import tempfile
import uuid

log = get_logger(__name__)


INTERMEDIATE_EXTENSIONS = ('tex', 'pdf', 'log', 'aux')



class PdfRenderError(RuntimeError):
    """ Rendering failed; the message is meant for the caller, details are in the log """



@contextmanager
def latex_workspace(stem: str, temp_dir: str = None):
    """
    Yields unique paths for the intermediate files, keyed by extension.
    All of them are deleted afterwards; failing to delete one is only logged.
    """

    folder = Path(temp_dir or tempfile.gettempdir())
    safe_stem = re.sub(r'[^A-Za-z0-9_-]', '_', stem) or 'document'
    unique = f'{safe_stem}_{uuid.uuid4().hex}'
    paths = {ext: folder / f'{unique}.{ext}' for ext in INTERMEDIATE_EXTENSIONS}
    try:
        yield paths
    finally:
        for path in paths.values():
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                log.warning('Could not delete %s: %s', path, e)



class PdfRenderer:

    def __init__(self, settings: Settings = None):
        self.settings = settings if settings is not None else Settings()


    def command(self, tex_path: Path) -> "list[str]":
        return [
            self.settings.latex_binary,
            '-interaction=nonstopmode',
            '-halt-on-error',
            f'-output-directory={tex_path.parent}',
            str(tex_path),
        ]


    def render(self, tex: str, stem: str = 'registers') -> bytes:
        """Typesets the LaTeX source and returns the PDF contents"""

        with latex_workspace(stem, self.settings.temp_dir) as paths:

            paths['tex'].write_text(tex, encoding='utf-8')
            log.debug('LaTeX source written to %s', paths['tex'])

            cmd = self.command(paths['tex'])
            try:
                proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.settings.latex_timeout, check=False)
            except FileNotFoundError as e:
                raise PdfRenderError(f'Typesetting binary "{self.settings.latex_binary}" not found') from e
            except subprocess.TimeoutExpired as e:
                raise PdfRenderError(f'Typesetting timed out after {self.settings.latex_timeout} s') from e

            if proc.returncode != 0:
                log.debug('%s output:\n%s', self.settings.latex_binary, proc.stdout)
                raise PdfRenderError(f'Typesetting failed with exit code {proc.returncode}')

            if not paths['pdf'].exists():
                raise PdfRenderError('Typesetting produced no PDF')

            pdf = paths['pdf'].read_bytes()
            log.info('Rendered %s (%d bytes)', paths['pdf'].name, len(pdf))
            return pdf
