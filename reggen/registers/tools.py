from .structure.types import Device, SectionKind

import re


def check_names(device: "Device", test_fn: callable = None):

    if not isinstance(device.name, str) or len(device.name)<1:
        raise RuntimeError(f'Device name "{device.name}" must be a proper string')
    if test_fn:
        test_fn(device.name)

    regnames = set()
    for reg in device.registers:

        if not isinstance(reg.name, str) or len(reg.name)<1:
            raise RuntimeError(f'Register name "{reg.name}" must be a proper string')
        if test_fn:
            test_fn(reg.name)

        regnames.add(reg.name.upper())

        fields = [s for s in reg.sections if s.kind is SectionKind.Field]
        fieldnames = set()
        for field in fields:

            if not isinstance(field.name, str) or len(field.name)<1:
                raise RuntimeError(f'Field name "{field.name}" in {device.name}.{reg.name} must be a proper string')
            if test_fn:
                test_fn(field.name)
            check_spare_collision(reg.name, field.name)

            fieldnames.add(field.name.upper())

        if len(fieldnames) < len(fields):
            raise RuntimeError(f'Field names in {device.name}.{reg.name} are not unique')

    if len(regnames) < len(device.registers):
        raise RuntimeError(f'Register names in {device.name} are not unique')


def check_c_name(name: str):
    if not re.fullmatch(r'[_a-zA-Z][_a-zA-Z0-9]*', name):
        raise RuntimeError(f'Invalid name for C-code generation: "{name}"')


def check_spare_collision(reg_name: str, field_name: str):
    # spares are named SPARE_BITS_<n> in macros and spare_<reg>_<n> in structs
    if re.fullmatch(r'SPARE_BITS_[0-9]+', field_name.upper()) or \
            re.fullmatch(rf'spare_{re.escape(reg_name.lower())}_[0-9]+', field_name.lower()):
        raise RuntimeError(f'Field name "{field_name}" in {reg_name} is reserved for spare bits')


def registers_filename(device_name: str, ext: str) -> str:
    """ Name of a generated file, e.g. uart_registers.h """
    return f'{device_name.lower()}_registers.{ext}'
