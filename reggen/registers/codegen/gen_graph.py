from ..structure.types import Device
from ..structure.layout_solver import SectionLayout
from ..tools import registers_filename
from ...tools import graphviz_escape

from graphviz import Digraph
import os



class RegisterGraphGenerator:

    def __init__(self, device: Device, filename: str = None):
        self.device = device
        self.filename = filename if filename is not None else registers_filename(device.name, 'gv')

        gen = RegisterGraphGeneratorHelper(device, self.filename)
        self.graph = gen.graph


    def get_graph(self) -> Digraph:
        """Returns the register layout as a graphviz object"""

        return self.graph


    def save(self, filename: str = None, render: bool = True):
        """
        Saves the graph to a file.
        filename:  Target file
        render:    If True, a graphic is created. The format depends on the file extension of
            filename, e.g. ".pdf" or ".png". If False, the raw dot-file (graphviz format)
            is saved instead.
        """

        filename = filename or self.filename
        if render:
            path_only, ext = os.path.splitext(filename)
            format = ext[1:] # remove the dot
            self.graph.render(path_only, cleanup=True, format=format)
        else:
            self.graph.save(filename)



class RegisterGraphGeneratorHelper:


    def __init__(self, device: Device, filename: str):
        self.device = device
        self.filename = filename

        self.update()


    def update(self):

        g = Digraph('G', filename=self.filename)
        g.attr('graph', rankdir='TB', label=f'{self.device.name} @ {self.device.base_address}', labelloc='t')
        g.attr('node', shape='record', style='filled', fillcolor='OldLace', fontname='Helvetica')

        def reg_id(index: int) -> str:
            return f'reg{index}'
        def section_label(layout: SectionLayout) -> str:
            if layout.is_field:
                name = f'{graphviz_escape(layout.section.name)}\\n{layout.section.access.value}'
            else:
                name = 'SPARE'
            return f'{name}\\n{layout.end_bit}:{layout.start_bit}'

        for i_reg, reg in enumerate(self.device.registers):
            # MSB on the left, as in a data sheet
            sections = '|'.join(section_label(l) for l in reversed(reg.get_layout()))
            g.node(reg_id(i_reg), label=f'{{{graphviz_escape(reg.name)}\\n0x{reg.get_byte_offset():04X}|{{{sections}}}}}')

        g.attr('edge', style='invis')
        for i_reg in range(1, len(self.device.registers)):
            g.edge(reg_id(i_reg-1), reg_id(i_reg))

        self.graph = g
