import os
import tempfile
import unittest

from reggen.registers.codegen import RegisterHGenerator
from reggen.registers.structure import Access, Device, Field, Register, Spare
from reggen.tools import c_hex_literal


def uart(bit_width=32):
    return Device('Uart', 'Serial port', '0x40000000', bit_width, [
        Register('Ctrl', 'Control', [Field('En', 1, Access.ReadWrite, 'Enable'), Spare(bit_width - 1)]),
        Register('STATUS', 'Status', [
            Field('RXNE', 1, Access.Read), Spare(2), Field('TXE', 1, Access.Read), Spare(bit_width - 4)]),
        Register('CMD', 'Command', [Field('GO', 1, Access.Write), Spare(bit_width - 1)]),
    ])


class TestRegisterHGenerator(unittest.TestCase):

    def setUp(self):
        self.h = RegisterHGenerator(uart()).get_header()
        self.lines = self.h.splitlines()

    def test_include_guard_and_stdint(self):
        self.assertIn('#ifndef UART_REGISTERS_H', self.lines)
        self.assertIn('#define UART_REGISTERS_H', self.lines)
        self.assertIn('#include <stdint.h>', self.lines)
        self.assertEqual(self.lines[-1], '#endif /* UART_REGISTERS_H */')
        self.assertIn('* @file uart_registers.h', self.lines)

    def test_base_address(self):
        self.assertIn('#define UART_BASE_ADDRESS ((uint32_t)(0x40000000U))', self.lines)

    def test_field_shift_and_mask(self):
        self.assertIn('#define CTRL_EN_SHIFT ((uint32_t)(0U))', self.lines)
        self.assertIn('#define CTRL_EN_MASK ((uint32_t)(0x00000001U << CTRL_EN_SHIFT))', self.lines)
        self.assertIn('#define STATUS_TXE_SHIFT ((uint32_t)(3U))', self.lines)

    def test_spare_shift_and_mask(self):
        self.assertIn('#define CTRL_SPARE_BITS_1_SHIFT ((uint32_t)(1U))', self.lines)
        self.assertIn('#define CTRL_SPARE_BITS_1_MASK ((uint32_t)(0x7FFFFFFFU << CTRL_SPARE_BITS_1_SHIFT))', self.lines)
        # accessors are only declared for named fields
        self.assertNotIn('SPARE_BITS_1_GET', self.h)

    def test_two_spares_get_distinct_names(self):
        self.assertIn('#define STATUS_SPARE_BITS_1_SHIFT ((uint32_t)(1U))', self.lines)
        self.assertIn('#define STATUS_SPARE_BITS_3_SHIFT ((uint32_t)(4U))', self.lines)
        self.assertIn('#define STATUS_SPARE_BITS_3_MASK ((uint32_t)(0x0FFFFFFFU << STATUS_SPARE_BITS_3_SHIFT))', self.lines)

    def test_prototypes_follow_access(self):
        self.assertIn('uint32_t CTRL_EN_GET(void);', self.lines)
        self.assertIn('void CTRL_EN_SET(uint32_t value);', self.lines)
        self.assertIn('uint32_t STATUS_RXNE_GET(void);', self.lines)
        self.assertNotIn('STATUS_RXNE_SET', self.h)
        self.assertIn('void CMD_GO_SET(uint32_t value);', self.lines)
        self.assertNotIn('CMD_GO_GET', self.h)

    def test_descriptions(self):
        self.assertIn('* @details Enable', self.lines)
        self.assertIn('* @details No description provided', self.lines)
        h = RegisterHGenerator(uart(), format=RegisterHGenerator.Format(doc_comments=False)).get_header()
        self.assertNotIn('@details', h)

    def test_64_bit(self):
        device = Device('Dma', '', '0x1000', 64, [
            Register('Addr', '', [Field('Lo', 4, Access.Read), Spare(60)]),
            Register('Full', '', [Field('All', 64, Access.ReadWrite)]),
        ])
        lines = RegisterHGenerator(device).get_header().splitlines()
        self.assertIn('#define DMA_BASE_ADDRESS ((uint64_t)(0x1000ULL))', lines)
        self.assertIn('#define ADDR_LO_MASK ((uint64_t)(0x000000000000000FULL << ADDR_LO_SHIFT))', lines)
        self.assertIn('#define ADDR_SPARE_BITS_1_MASK ((uint64_t)(0x0FFFFFFFFFFFFFFFULL << ADDR_SPARE_BITS_1_SHIFT))', lines)
        self.assertIn('#define FULL_ALL_MASK ((uint64_t)(0xFFFFFFFFFFFFFFFFULL << FULL_ALL_SHIFT))', lines)
        self.assertIn('uint64_t FULL_ALL_GET(void);', lines)

    def test_base_address_suffix_is_not_doubled(self):
        device = Device('X', '', '0x20000000UL', 32, [Register('R', '', [Spare(32)])])
        self.assertIn('#define X_BASE_ADDRESS ((uint32_t)(0x20000000UL))', RegisterHGenerator(device).get_header())

    def test_invalid_c_names(self):
        device = Device('Dev', '', '0x0', 32, [Register('1st', '', [Spare(32)])])
        with self.assertRaises(RuntimeError):
            RegisterHGenerator(device)
        device = Device('Dev', '', '0x0', 32, [Register('R', '', [Field('my field', 32, Access.Read)])])
        with self.assertRaises(RuntimeError):
            RegisterHGenerator(device)

    def test_invalid_device_name(self):
        device = Device('My UART', '', '0x0', 32, [Register('R', '', [Spare(32)])])
        with self.assertRaises(RuntimeError):
            RegisterHGenerator(device)

    def test_field_named_like_a_spare(self):
        device = Device('Dev', '', '0x0', 32, [Register('R', '', [Field('A', 1, Access.Read), Spare(1), Field('spare_bits_1', 30, Access.Read)])])
        with self.assertRaises(RuntimeError):
            RegisterHGenerator(device)

    def test_description_cannot_close_comment(self):
        device = Device('Dev', '', '0x0', 32, [Register('R', '', [Field('A', 32, Access.Read, 'ends */ here')])])
        lines = RegisterHGenerator(device).get_header().splitlines()
        self.assertIn('* @details ends * / here', lines)

    def test_hex_literal_range(self):
        self.assertEqual(c_hex_literal(0xF, 32), '0x0000000FU')
        with self.assertRaises(ValueError):
            c_hex_literal(1 << 32, 32)
        with self.assertRaises(ValueError):
            c_hex_literal(-1, 64)

    def test_duplicate_field_names(self):
        device = Device('Dev', '', '0x0', 32, [Register('R', '', [Field('A', 16, Access.Read), Field('a', 16, Access.Read)])])
        with self.assertRaises(RuntimeError):
            RegisterHGenerator(device)

    def test_save(self):
        gen = RegisterHGenerator(uart())
        self.assertEqual(gen.get_filename(), 'uart_registers.h')
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, gen.get_filename())
            gen.save(path)
            with open(path) as fp:
                self.assertEqual(fp.read(), gen.get_header())


if __name__ == '__main__':
    unittest.main()
