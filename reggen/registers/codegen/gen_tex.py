from ..structure.types import Device
from ..structure.layout_solver import SectionLayout
from ..tools import registers_filename
from ...tools import latex_escape, latex_table

from dataclasses import dataclass, field



class RegisterTexGenerator:

    @dataclass
    class Format:

        """Shown as author on the title page"""
        author: str = 'Generated by Register Generator'

        """Options for the geometry package"""
        geometry: str = 'a4paper, margin=1in'

        packages: list[str] = field(default_factory=lambda: ['longtable', 'booktabs', 'array', 'multirow', 'colortbl', 'xcolor'])

    def __init__(self, device: Device, format: Format = None):
        self.device = device
        self.format = format if format is not None else RegisterTexGenerator.Format()

        gen = RegisterTexGeneratorHelper(device, self.format)
        self.tex = gen.tex


    def get_tex(self) -> str:
        return self.tex


    def get_filename(self) -> str:
        return registers_filename(self.device.name, 'tex')


    def save(self, filename: str = None):
        with open(filename or self.get_filename(), 'w', encoding='utf-8') as fp:
            fp.write(self.get_tex())



class RegisterTexGeneratorHelper:


    def __init__(self, device: Device, format: "RegisterTexGenerator.Format"):
        self.device = device
        self.format = format

        self.tex_lines = []

        from .gen_sw import RegisterSoftwareGenerator
        RegisterSoftwareGenerator(self.device).generate(self)


    def define_basics(self, device_name: str, description: str, base_address: str, bit_width: int):

        tex = self.tex_lines
        name = latex_escape(device_name)

        tex.append('\\documentclass{article}')
        tex.append(f'\\usepackage[{self.format.geometry}]{{geometry}}')
        for package in self.format.packages:
            tex.append(f'\\usepackage{{{package}}}')
        tex.append('')
        tex.append(f'\\title{{{name} Register Documentation}}')
        tex.append(f'\\author{{{latex_escape(self.format.author)}}}')
        tex.append('\\date{\\today}')
        tex.append('')
        tex.append('\\begin{document}')
        tex.append('')
        tex.append('\\maketitle')
        tex.append('')
        tex.append('\\section{Device Description}')
        tex.append(latex_escape(description))
        tex.append('')
        tex.append('\\section{Base Address}')
        tex.append(f'The base address for {name} is {latex_escape(base_address)}.')
        tex.append('')
        tex.append('\\section{Registers}')
        tex.append('')


    def begin_register(self, index: int, name: str, description: str, byte_offset: int):

        tex = self.tex_lines

        tex.append(f'\\subsection{{{latex_escape(name)}}}')
        tex.append(f'\\textbf{{Description:}} {latex_escape(description)}')
        tex.append('')
        tex.append(f'\\textbf{{Offset:}} 0x{byte_offset:04x}')
        tex.append('')
        tex.append('\\begin{longtable}{|l|c|c|p{6cm}|}')
        tex.append('\\hline')
        tex.append('\\textbf{Field} & \\textbf{Bits} & \\textbf{Access} & \\textbf{Description} \\\\')
        tex.append('\\hline')
        tex.append('\\endhead')

        self.rows = []


    def add_field(self, layout: SectionLayout):
        section = layout.section
        self.rows.append([
            latex_escape(section.name),
            f'{layout.start_bit}:{layout.end_bit}',
            section.access.value.upper(),
            latex_escape(section.description or ''),
        ])


    def add_read_func(self):
        ...


    def add_write_func(self):
        ...


    def end_field(self):
        ...


    def add_spare(self, layout: SectionLayout):
        self.rows.append(['SPARE', f'{layout.start_bit}:{layout.end_bit}', '-', 'Spare bits'])


    def end_register(self):
        self.tex_lines.extend(latex_table(self.rows))
        self.tex_lines.append('\\end{longtable}')
        self.tex_lines.append('')


    def finish(self):
        self.tex_lines.append('\\end{document}')
        self.tex_lines.append('')
        self.tex = '\n'.join(self.tex_lines)
