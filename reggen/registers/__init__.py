from .structure.types import Access, SectionKind, Field, Spare, Register, Device

from .codegen.gen_h import RegisterHGenerator
from .codegen.gen_c import RegisterCGenerator
from .codegen.gen_tex import RegisterTexGenerator
from .codegen.gen_graph import RegisterGraphGenerator
