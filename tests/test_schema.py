import unittest

from pydantic import ValidationError

from reggen.registers.structure import Access, SectionKind
from reggen.service.schema import DeviceRequest, FieldSection, SpareSection


def payload(**overrides):
    data = {
        'deviceName': 'UART',
        'deviceDescription': 'Serial port',
        'baseAddress': '0x40000000',
        'bitWidth': '32',
        'registers': [
            {'id': 'a1', 'name': 'CTRL', 'description': 'Control', 'sections': [
                {'name': 'EN', 'bits': 1, 'access': 'read-write'},
                {'bits': 31},
            ]},
        ],
    }
    data.update(overrides)
    return data


class TestDeviceRequest(unittest.TestCase):

    def test_form_payload(self):
        req = DeviceRequest.model_validate(payload())
        self.assertEqual(req.bit_width, 32)
        sections = req.registers[0].sections
        self.assertIsInstance(sections[0], FieldSection)
        self.assertIsInstance(sections[1], SpareSection)
        self.assertEqual(sections[0].access, Access.ReadWrite)

    def test_to_device(self):
        device = DeviceRequest.model_validate(payload(bitWidth=32)).to_device()
        self.assertEqual(device.name, 'UART')
        self.assertEqual(device.base_address, '0x40000000')
        reg = device.registers[0]
        self.assertEqual([s.kind for s in reg.sections], [SectionKind.Field, SectionKind.Spare])
        self.assertEqual(reg.get_layout()[1].start_bit, 1)
        self.assertFalse(hasattr(reg, 'id'))

    def test_explicit_kind_and_snake_case(self):
        data = {
            'device_name': 'DMA', 'base_address': '0x0', 'bit_width': 64,
            'registers': [{'name': 'R', 'sections': [{'kind': 'spare', 'bits': 64}]}],
        }
        req = DeviceRequest.model_validate(data)
        self.assertEqual(req.device_description, '')
        self.assertIsInstance(req.registers[0].sections[0], SpareSection)

    def test_missing_required(self):
        for key in ('deviceName', 'baseAddress', 'bitWidth', 'registers'):
            data = payload()
            del data[key]
            with self.assertRaises(ValidationError, msg=key):
                DeviceRequest.model_validate(data)

    def test_empty_values(self):
        for key, value in (('deviceName', ''), ('baseAddress', ''), ('registers', []), ('bitWidth', '16')):
            with self.assertRaises(ValidationError, msg=key):
                DeviceRequest.model_validate(payload(**{key: value}))

    def test_width_mismatch(self):
        data = payload()
        data['registers'][0]['sections'][1]['bits'] = 30
        with self.assertRaises(ValidationError):
            DeviceRequest.model_validate(data)

    def test_bad_section(self):
        data = payload()
        data['registers'][0]['sections'][0]['access'] = 'execute'
        with self.assertRaises(ValidationError):
            DeviceRequest.model_validate(data)
        data = payload()
        data['registers'][0]['sections'][1]['bits'] = 0
        with self.assertRaises(ValidationError):
            DeviceRequest.model_validate(data)

    def test_blank_field_name_is_not_a_spare(self):
        data = payload()
        data['registers'][0]['sections'][0]['name'] = ''
        with self.assertRaises(ValidationError):
            DeviceRequest.model_validate(data)

    def test_device_name_must_be_identifier(self):
        for name in ('My UART', 'UART\r\nX-Injected: yes', '1UART', 'uart"'):
            with self.assertRaises(ValidationError, msg=name):
                DeviceRequest.model_validate(payload(deviceName=name))
        self.assertEqual(DeviceRequest.model_validate(payload(deviceName='_Uart2')).device_name, '_Uart2')


if __name__ == '__main__':
    unittest.main()
