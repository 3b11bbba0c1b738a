from ..structure.types import Device, SectionKind
from ..structure.layout_solver import SectionLayout

from abc import ABC



class AbstractRegisterScripter(ABC):
    def define_basics(self, device_name: str, description: str, base_address: str, bit_width: int): ...
    def begin_register(self, index: int, name: str, description: str, byte_offset: int): ...
    def add_field(self, layout: SectionLayout): ...
    def add_read_func(self): ...
    def add_write_func(self): ...
    def end_field(self): ...
    def add_spare(self, layout: SectionLayout): ...
    def end_register(self): ...
    def finish(self): ...



class RegisterSoftwareGenerator:
    """
    Walks a device register by register, section by section, and tells a scripter what to emit.
    All generators get their bit ranges from here, so they cannot disagree on offsets.
    """


    def __init__(self, device: Device):
        self.device = device


    def generate(self, scripter: AbstractRegisterScripter):

        scripter.define_basics(self.device.name, self.device.description, self.device.base_address, self.device.bit_width)

        for i_reg, reg in enumerate(self.device.registers):

            scripter.begin_register(i_reg, reg.name, reg.description, reg.get_byte_offset())

            for layout in reg.get_layout():

                if layout.section.kind is SectionKind.Field:

                    scripter.add_field(layout)
                    if layout.section.access.readable:
                        scripter.add_read_func()
                    if layout.section.access.writable:
                        scripter.add_write_func()
                    scripter.end_field()

                elif layout.section.kind is SectionKind.Spare:

                    scripter.add_spare(layout)

                else:
                    raise ValueError(f'Invalid section in {self.device.name}.{reg.name}: {layout.section}')

            scripter.end_register()

        scripter.finish()
