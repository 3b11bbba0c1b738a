from .types import Device, Register, SectionKind

import dataclasses



@dataclasses.dataclass(frozen=True)
class SectionLayout:

    section: "Field|Spare"

    """ position of the section within its register """
    index: int

    start_bit: int

    end_bit: int

    @property
    def bits(self) -> int:
        return self.end_bit - self.start_bit + 1

    @property
    def shift(self) -> int:
        return self.start_bit

    @property
    def run(self) -> int:
        """ the mask before shifting, i.e. <bits> ones """
        return (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        return self.run << self.shift

    @property
    def is_field(self) -> bool:
        return self.section.kind is SectionKind.Field



class RegisterLayoutSolver:

    def __init__(self, device: "Device"):
        self.device = device
        device.check()
        self.assign_bit_ranges()
        self.assign_byte_offsets()


    @staticmethod
    def solve(register: "Register") -> "list[SectionLayout]":
        """
        Walks the sections LSB first; each section starts right after the previous one.

        Example: sections of 1 and 31 bits -> [0:0] and [1:31]
        """

        layout = []
        current_bit = 0
        for index, section in enumerate(register.sections):
            if section.kind not in (SectionKind.Field, SectionKind.Spare):
                raise ValueError(f'Invalid section in {register.name}: {section}')
            start_bit = current_bit
            end_bit = current_bit + section.bits - 1
            layout.append(SectionLayout(section, index, start_bit, end_bit))
            current_bit = end_bit + 1
        return layout


    def assign_bit_ranges(self):
        for reg in self.device.registers:
            reg._layout = RegisterLayoutSolver.solve(reg)


    def assign_byte_offsets(self):
        # registers are packed at a fixed stride of one full register width
        stride = self.device.register_stride()
        for index, reg in enumerate(self.device.registers):
            reg._byte_offset = index * stride
