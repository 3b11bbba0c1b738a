"""Request/descriptor models; they mirror the JSON the register form posts."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..registers.structure.types import Access, Device, Register
from ..registers.structure import types as core


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class FieldSection(_Model):
    """A named, access-controlled bit range."""

    kind: Literal['field'] = 'field'
    name: str = Field(min_length=1)
    bits: int = Field(gt=0)
    access: Access
    description: Optional[str] = None

    def to_core(self) -> core.Field:
        return core.Field(name=self.name, bits=self.bits, access=self.access, description=self.description)


class SpareSection(_Model):
    """Reserved padding bits."""

    kind: Literal['spare'] = 'spare'
    bits: int = Field(gt=0)

    def to_core(self) -> core.Spare:
        return core.Spare(bits=self.bits)


SectionModel = Annotated[Union[FieldSection, SpareSection], Field(discriminator='kind')]


class RegisterModel(_Model):
    # presentation-only identity of the form, not used for generation
    id: Optional[str] = None
    name: str = Field(min_length=1)
    description: str = ''
    sections: list[SectionModel] = Field(min_length=1)

    @field_validator('sections', mode='before')
    @classmethod
    def _infer_kind(cls, v):
        # the form sends {name, bits, access} or {bits}; tag them explicitly
        if not isinstance(v, list):
            return v
        tagged = []
        for item in v:
            if isinstance(item, dict) and 'kind' not in item:
                item = {**item, 'kind': 'field' if 'name' in item else 'spare'}
            tagged.append(item)
        return tagged

    def to_core(self) -> Register:
        return Register(name=self.name, description=self.description, sections=[s.to_core() for s in self.sections])


class DeviceRequest(_Model):
    # ends up in C identifiers and in the download filename
    device_name: str = Field(alias='deviceName', min_length=1, pattern=r'^[_A-Za-z][_A-Za-z0-9]*$')
    device_description: str = Field(alias='deviceDescription', default='')
    base_address: str = Field(alias='baseAddress', min_length=1)
    bit_width: Literal[32, 64] = Field(alias='bitWidth')
    registers: list[RegisterModel] = Field(min_length=1)

    @field_validator('bit_width', mode='before')
    @classmethod
    def _parse_bit_width(cls, v):
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v

    @field_validator('device_description', mode='before')
    @classmethod
    def _none_is_empty(cls, v):
        return '' if v is None else v

    @model_validator(mode='after')
    def _check_widths(self):
        for reg in self.registers:
            total = sum(s.bits for s in reg.sections)
            if total != self.bit_width:
                raise ValueError(f'register {reg.name} spans {total} bits, expected {self.bit_width}')
        return self

    def to_device(self) -> Device:
        return Device(
            name=self.device_name,
            description=self.device_description,
            base_address=self.base_address,
            bit_width=self.bit_width,
            registers=[r.to_core() for r in self.registers],
        )
