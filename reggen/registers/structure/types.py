import dataclasses
import enum
import re
import typing
import warnings



class Access(enum.Enum):
    """ field can only be read """
    Read = 'read'
    """ field can only be written """
    Write = 'write'
    """ field can be read and written (read-modify-write) """
    ReadWrite = 'read-write'

    @property
    def readable(self) -> bool:
        return self in (Access.Read, Access.ReadWrite)

    @property
    def writable(self) -> bool:
        return self in (Access.Write, Access.ReadWrite)



class SectionKind(enum.Enum):
    Field = 'field'
    Spare = 'spare'



@dataclasses.dataclass
class Field:

    name: str

    """ width in bits; the position follows from the sections before it """
    bits: int

    access: Access

    description: str = dataclasses.field(default=None)

    kind: typing.ClassVar[SectionKind] = SectionKind.Field

    def __post_init__(self):
        # also accept the plain strings, e.g. 'read-write'
        self.access = Access(self.access)



@dataclasses.dataclass
class Spare:

    """ width in bits of the reserved range """
    bits: int

    kind: typing.ClassVar[SectionKind] = SectionKind.Spare



Section = typing.Union[Field, Spare]



class Register:


    def __init__(self, name: str, description: str, sections: "list[Section]"):
        """
        name:        Register name, used (case-folded) in all generated identifiers
        description: Free text for the documentation
        sections:    Fields and spares, LSB first; their widths must add up to the device width
        """

        self.name, self.description, self.sections = name, description, sections
        self._layout: "typing.Optional[list[SectionLayout]]" = None
        self._byte_offset: typing.Optional[int] = None


    def get_layout(self) -> "list[SectionLayout]":
        if self._layout is None:
            raise RuntimeError('This register was not properly initialized yet. Put it into a Device first.')
        return self._layout


    def get_byte_offset(self) -> int:
        if self._byte_offset is None:
            raise RuntimeError('This register was not properly initialized yet. Put it into a Device first.')
        return self._byte_offset


    def fields(self) -> "list[Field]":
        return [s for s in self.sections if s.kind is SectionKind.Field]



class Device:

    def __init__(self, name: str, description: str, base_address: str, bit_width: int, registers: "list[Register]"):
        """
        name:         Name of the peripheral, e.g. "UART"
        description:  Free text for the documentation
        base_address: Address of the 1st register, as hex literal text (copied verbatim into the code)
        bit_width:    Register width, in bits (32 or 64)
        registers:    List of registers, in address order
        """

        self.name, self.description, self.base_address, self.bit_width, self.registers = \
            name, description, base_address, bit_width, registers

        self.check()
        self._update()


    def _update(self):
        from .layout_solver import RegisterLayoutSolver
        RegisterLayoutSolver(self)


    def check(self):

        if not self.name:
            raise ValueError(f'Device name must not be empty')

        if not self.base_address:
            raise ValueError(f'Base address of {self.name} must not be empty')
        if not re.fullmatch(r'0[xX][0-9a-fA-F]+[uUlL]*', self.base_address.strip()):
            warnings.warn(f'Base address "{self.base_address}" of {self.name} does not look like a hex literal; it is copied as-is', UserWarning)

        if self.bit_width not in (32, 64):
            raise ValueError(f'Register width of {self.name} must be 32 or 64 bit, got {self.bit_width}')

        if len(self.registers)<1:
            raise ValueError(f'Need at least one register')

        if len(self.registers) != len(set([r.name.upper() for r in self.registers])):
            raise RuntimeError(f'Register names in {self.name} must be unique')

        for reg in self.registers:

            if len(reg.sections)<1:
                raise ValueError(f'Register {self.name}.{reg.name} has no sections')

            for section in reg.sections:
                if isinstance(section.bits, bool) or not isinstance(section.bits, int) or section.bits < 1:
                    raise ValueError(f'Invalid bits in {self.name}.{reg.name}: {section.bits}')

            total = sum(s.bits for s in reg.sections)
            if total != self.bit_width:
                raise ValueError(f'Sections of {self.name}.{reg.name} span {total} bits, but registers are {self.bit_width} bit wide')


    def register_stride(self) -> int:
        """ Distance between two registers, in bytes """
        return self.bit_width // 8
