from .types import Access, SectionKind, Field, Spare, Section, Register, Device
from .layout_solver import SectionLayout, RegisterLayoutSolver
