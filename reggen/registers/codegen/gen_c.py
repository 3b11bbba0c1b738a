from ..structure.types import Device
from ..structure.layout_solver import SectionLayout
from ..tools import check_names, check_c_name, registers_filename
from ...tools import c_int_type

from dataclasses import dataclass, field



class RegisterCGenerator:

    @dataclass
    class Format:

        """Additional headers (including quotes or brackets) that are included after the generated header"""
        includes: list[str] = field(default_factory=list)

        """One level of indentation"""
        indent: str = '    '

    def __init__(self, device: Device, format: Format = None):
        """
        device: the device to create C-code from
        format: a RegisterCGenerator.Format object to control code generation
        """

        self.device = device
        self.format = format if format is not None else RegisterCGenerator.Format()

        gen = RegisterCGeneratorHelper(device, self.format)
        self.code_source = gen.code_source


    def get_code(self) -> str:
        """Returns the generated C-code as a string"""

        return self.code_source


    def get_filename(self) -> str:
        return registers_filename(self.device.name, 'c')


    def save(self, filename: str = None):
        with open(filename or self.get_filename(), 'w') as fp:
            fp.write(self.get_code())



class RegisterCGeneratorHelper:

    def __init__(self, device: Device, format: "RegisterCGenerator.Format"):

        self.device = device
        self.format = format

        self.code_main = []
        self.code_structs = []
        self.code_map = []
        self.code_funcs = []

        check_names(self.device, check_c_name)

        self.generate()


    def generate(self):
        from .gen_sw import RegisterSoftwareGenerator
        RegisterSoftwareGenerator(self.device).generate(self)


    def define_basics(self, device_name: str, description: str, base_address: str, bit_width: int):

        self.int_type = c_int_type(bit_width)
        self.dev_upper = device_name.upper()
        self.map_type = f'{self.dev_upper}_RegisterMap_t'
        self.map_ptr = f'{self.dev_upper}_REGS'

        self.code_main.append('/**')
        self.code_main.append(f'* @file {registers_filename(device_name, "c")}')
        self.code_main.append(f'* @brief Implementation of register access functions for {device_name}')
        self.code_main.append('*/')
        self.code_main.append('')
        self.code_main.append(f'#include "{registers_filename(device_name, "h")}"')
        for include in self.format.includes:
            self.code_main.append(f'#include {include}')
        self.code_main.append('')

        self.code_map.append('typedef struct {')


    def begin_register(self, index: int, name: str, description: str, byte_offset: int):

        ind = self.format.indent

        self.reg_name = name
        self.reg_upper = name.upper()
        self.reg_lower = name.lower()
        self.reg_type = f'{self.reg_upper}_t'

        self.code_structs.append(f'/* Register structure for {name} */')
        self.code_structs.append('typedef struct {')

        self.code_map.append(f'{ind}volatile {self.reg_type} {self.reg_lower};')

        # accessors work on the whole register word, not on the bitfield member
        self.word_ptr = f'(volatile {self.int_type} *)&{self.map_ptr}->{self.reg_lower}'


    def add_field(self, layout: SectionLayout):

        self.field_prefix = f'{self.reg_upper}_{layout.section.name.upper()}'
        self.shift_const = f'{self.field_prefix}_SHIFT'
        self.mask_const = f'{self.field_prefix}_MASK'

        self.code_structs.append(f'{self.format.indent}{self.int_type} {layout.section.name.lower()} : {layout.bits}U;')


    def add_read_func(self):

        ind = self.format.indent

        self.code_funcs.append(f'{self.int_type} {self.field_prefix}_GET(void)')
        self.code_funcs.append('{')
        self.code_funcs.append(f'{ind}volatile {self.int_type} *reg = {self.word_ptr};')
        self.code_funcs.append(f'{ind}return ({self.int_type})((*reg & {self.mask_const}) >> {self.shift_const});')
        self.code_funcs.append('}')
        self.code_funcs.append('')


    def add_write_func(self):

        ind = self.format.indent

        self.code_funcs.append(f'void {self.field_prefix}_SET({self.int_type} value)')
        self.code_funcs.append('{')
        self.code_funcs.append(f'{ind}volatile {self.int_type} *reg = {self.word_ptr};')
        self.code_funcs.append(f'{ind}*reg = ({self.int_type})((*reg & ~{self.mask_const}) | ((value << {self.shift_const}) & {self.mask_const}));')
        self.code_funcs.append('}')
        self.code_funcs.append('')


    def end_field(self):
        ...


    def add_spare(self, layout: SectionLayout):
        self.code_structs.append(f'{self.format.indent}{self.int_type} spare_{self.reg_lower}_{layout.index} : {layout.bits}U;')


    def end_register(self):
        self.code_structs.append(f'}} {self.reg_type};')
        self.code_structs.append('')


    def finish(self):

        self.code_map.append(f'}} {self.map_type};')
        self.code_map.append('')
        self.code_map.append('/* Static register map */')
        self.code_map.append(f'static volatile {self.map_type}* const {self.map_ptr} = ({self.map_type}*){self.dev_upper}_BASE_ADDRESS;')
        self.code_map.append('')

        self.code_main.extend(self.code_structs)
        self.code_main.extend(self.code_map)
        self.code_main.extend(self.code_funcs)

        self.code_source = '\n'.join(self.code_main)
