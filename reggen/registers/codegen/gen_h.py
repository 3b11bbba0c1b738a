from ..structure.types import Device
from ..structure.layout_solver import SectionLayout
from ..tools import check_names, check_c_name, registers_filename
from ...tools import c_int_type, c_int_suffix, c_hex_literal, c_address_literal, c_comment_text

from dataclasses import dataclass, field



class RegisterHGenerator:

    @dataclass
    class Format:

        """Headers (including quotes or brackets) that are included at the top of the header"""
        includes: list[str] = field(default_factory=lambda: ['<stdint.h>'])

        """Emit a doxygen comment above every field and spare"""
        doc_comments: bool = True

    def __init__(self, device: Device, format: Format = None):
        """
        device: the device to create the C-header from
        format: a RegisterHGenerator.Format object to control code generation
        """

        self.device = device
        self.format = format if format is not None else RegisterHGenerator.Format()

        gen = RegisterHGeneratorHelper(device, self.format)
        self.code_header = gen.code_header


    def get_header(self) -> str:
        """Returns the generated C-header as a string"""

        return self.code_header


    def get_filename(self) -> str:
        return registers_filename(self.device.name, 'h')


    def save(self, filename: str = None):
        with open(filename or self.get_filename(), 'w') as fp:
            fp.write(self.get_header())



class RegisterHGeneratorHelper:

    def __init__(self, device: Device, format: "RegisterHGenerator.Format"):

        self.device = device
        self.format = format

        self.code = []

        check_names(self.device, check_c_name)

        self.generate()


    def generate(self):
        from .gen_sw import RegisterSoftwareGenerator
        RegisterSoftwareGenerator(self.device).generate(self)


    def define_basics(self, device_name: str, description: str, base_address: str, bit_width: int):

        self.bit_width = bit_width
        self.int_type = c_int_type(bit_width)
        self.suffix = c_int_suffix(bit_width)
        self.dev_upper = device_name.upper()
        self.guard = f'{self.dev_upper}_REGISTERS_H'

        self.code.append('/**')
        self.code.append(f'* @file {registers_filename(device_name, "h")}')
        self.code.append(f'* @brief Register definitions and access functions for {device_name}')
        self.code.append('*/')
        self.code.append('')
        self.code.append(f'#ifndef {self.guard}')
        self.code.append(f'#define {self.guard}')
        self.code.append('')
        for include in self.format.includes:
            self.code.append(f'#include {include}')
        self.code.append('')
        self.code.append('/**')
        self.code.append(f'* @brief Base address for {device_name}')
        self.code.append('*/')
        self.code.append(f'#define {self.dev_upper}_BASE_ADDRESS (({self.int_type})({c_address_literal(base_address, bit_width)}))')
        self.code.append('')


    def begin_register(self, index: int, name: str, description: str, byte_offset: int):
        self.reg_name = name
        self.reg_upper = name.upper()


    def _shift_and_mask(self, prefix: str, layout: SectionLayout):
        self.code.append(f'#define {prefix}_SHIFT (({self.int_type})({layout.shift}{self.suffix}))')
        self.code.append(f'#define {prefix}_MASK (({self.int_type})({c_hex_literal(layout.run, self.bit_width)} << {prefix}_SHIFT))')
        self.code.append('')


    def add_field(self, layout: SectionLayout):

        self.field_prefix = f'{self.reg_upper}_{layout.section.name.upper()}'

        if self.format.doc_comments:
            self.code.append('/**')
            self.code.append(f'* @brief {self.reg_name} - {layout.section.name}')
            self.code.append(f'* @details {c_comment_text(layout.section.description or "No description provided")}')
            self.code.append('*/')
        self._shift_and_mask(self.field_prefix, layout)
        self.n_prototypes = 0


    def add_read_func(self):
        self.code.append(f'{self.int_type} {self.field_prefix}_GET(void);')
        self.n_prototypes += 1


    def add_write_func(self):
        self.code.append(f'void {self.field_prefix}_SET({self.int_type} value);')
        self.n_prototypes += 1


    def end_field(self):
        if self.n_prototypes > 0:
            self.code.append('')


    def add_spare(self, layout: SectionLayout):

        prefix = f'{self.reg_upper}_SPARE_BITS_{layout.index}'

        if self.format.doc_comments:
            self.code.append('/**')
            self.code.append(f'* @brief {self.reg_name} - Spare bits {layout.index}')
            self.code.append('*/')
        self._shift_and_mask(prefix, layout)


    def end_register(self):
        ...


    def finish(self):
        self.code.append(f'#endif /* {self.guard} */')
        self.code.append('')
        self.code_header = '\n'.join(self.code)
