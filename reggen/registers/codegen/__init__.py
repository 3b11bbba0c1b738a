from .gen_h import RegisterHGenerator
from .gen_c import RegisterCGenerator
from .gen_tex import RegisterTexGenerator
from .gen_graph import RegisterGraphGenerator
