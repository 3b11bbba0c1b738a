import os

from context import reggen, demo_output_folder, prepare_output_folder

from reggen.registers.structure import Device, Register, Field, Spare, Access
from reggen.registers.codegen import RegisterHGenerator, RegisterCGenerator, RegisterTexGenerator, RegisterGraphGenerator



if __name__ == '__main__':

    OUT = demo_output_folder()
    prepare_output_folder()


    # The top-level is a device, which contains one or more equally-sized registers
    device = Device(
        # - The registers start at 0x40011000 (the text is copied into the code as-is)
        # - They are 32 bit each, and are packed one after another
        name='UART', description='Universal asynchronous receiver/transmitter', base_address='0x40011000', bit_width=32, registers=[

        # This is the first register, at offset 0x0000
        Register(name='CTRL', description='Control register', sections=[

            # Sections are listed LSB first; this field occupies bit 0
            Field(name='EN', bits=1, access=Access.ReadWrite, description='Enable the peripheral'),

            # A 3-bit field at bits 3:1 that can only be written
            Field(name='Mode', bits=3, access=Access.Write, description='Operating mode'),

            # The rest is reserved; the widths must add up to the register width
            Spare(bits=28),
        ]),

        # The next register follows at offset 0x0004
        Register(name='Status', description='Status flags', sections=[
            Field(name='RXNE', bits=1, access=Access.Read, description='Receive buffer not empty'),
            Spare(bits=4),
            Field(name='TC', bits=1, access=Access.Read, description='Transmission complete'),
            Spare(bits=26),
        ]),

        Register(name='DATA', description='Data register', sections=[
            Field(name='Value', bits=8, access=Access.ReadWrite, description='Data byte'),
            Spare(bits=24),
        ]),
    ])


    # The C header declares masks, shifts and accessors ...
    h = RegisterHGenerator(device)
    h.save(os.path.join(OUT, h.get_filename()))

    # ... the C code implements them
    c = RegisterCGenerator(device, format=RegisterCGenerator.Format(indent='\t'))
    c.save(os.path.join(OUT, c.get_filename()))

    # And we generate a documentation in LaTeX format
    tex = RegisterTexGenerator(device)
    tex.save(os.path.join(OUT, tex.get_filename()))

    # The layout can also be drawn (rendering requires the graphviz binaries)
    RegisterGraphGenerator(device).save(os.path.join(OUT, 'uart_layout.gv'), render=False)
