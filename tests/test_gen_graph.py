import os
import tempfile
import unittest

from reggen.registers.codegen import RegisterGraphGenerator
from reggen.registers.structure import Access, Device, Field, Register, Spare


def device():
    return Device('UART', '', '0x40000000', 32, [
        Register('CTRL', 'Control', [Field('EN', 1, Access.ReadWrite), Spare(31)]),
        Register('DATA', 'Data', [Field('VALUE', 8, Access.Read), Spare(24)]),
    ])


class TestRegisterGraphGenerator(unittest.TestCase):

    def test_one_record_per_register(self):
        source = RegisterGraphGenerator(device()).get_graph().source
        self.assertIn('reg0', source)
        self.assertIn('reg1', source)
        self.assertIn('shape=record', source)
        self.assertIn('reg0 -> reg1', source)

    def test_sections_msb_first(self):
        source = RegisterGraphGenerator(device()).get_graph().source
        self.assertIn('{CTRL\\n0x0000|{SPARE\\n31:1|EN\\nread-write\\n0:0}}', source)
        self.assertIn('{DATA\\n0x0004|{SPARE\\n31:8|VALUE\\nread\\n7:0}}', source)

    def test_save_source(self):
        gen = RegisterGraphGenerator(device())
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, 'layout.gv')
            gen.save(path, render=False)
            with open(path) as fp:
                self.assertIn('digraph G', fp.read())


if __name__ == '__main__':
    unittest.main()
