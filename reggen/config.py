from dataclasses import dataclass, fields
import os
import typing



@dataclass
class Settings:

    """Address the HTTP service binds to"""
    host: str = '127.0.0.1'

    port: int = 8000

    """Typesetting binary that turns the .tex document into a PDF"""
    latex_binary: str = 'pdflatex'

    """Where the intermediate .tex/.pdf/.log/.aux files go; None means the system temp folder"""
    temp_dir: typing.Optional[str] = None

    """Seconds to wait for the typesetting binary; None waits forever"""
    latex_timeout: typing.Optional[float] = None

    log_level: str = 'INFO'


    @classmethod
    def from_env(cls, environ: "typing.Mapping[str,str]" = None) -> "Settings":
        """
        Reads REGGEN_<FIELD> variables, e.g. REGGEN_PORT=9000 or REGGEN_LATEX_BINARY=/usr/bin/pdflatex;
        unset variables keep their defaults
        """

        environ = environ if environ is not None else os.environ
        values = {}
        for f in fields(cls):
            raw = environ.get(f'REGGEN_{f.name.upper()}')
            if raw is None or raw == '':
                continue
            if f.name == 'port':
                values[f.name] = int(raw)
            elif f.name == 'latex_timeout':
                values[f.name] = float(raw)
            else:
                values[f.name] = raw
        return cls(**values)


    def override(self, **kwargs) -> "Settings":
        """ Returns a copy with all non-None arguments applied, e.g. from the command line """
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in kwargs.items() if v is not None})
        return Settings(**values)
