#!/usr/bin/env python3

"""
Machine Faults

Every fault here is caused by the loaded program (or a defect in the emulator)
and none of them can be retried.  When one is raised, instruction execution
stops.  The host may log it and quit, or reset the machine and start again.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class MachineError(Exception):
    pass


class OutOfBoundsMemoryAccess(MachineError):
    def __init__(self, address, size=1):
        self.address = address
        self.size = size

        if size == 1:
            message = "Memory access out of range at address 0x{:04x}".format(address)
        else:
            message = "Memory access out of range for {} bytes at address 0x{:04x}".format(size, address)

        super().__init__(message)


class ProgramTooLarge(OutOfBoundsMemoryAccess):
    def __init__(self, address, size):
        super().__init__(address, size)
        self.args = ("Program of {} bytes does not fit in memory from address 0x{:03x}".format(size, address),)


class InvalidRegisterIndex(MachineError):
    def __init__(self, index):
        self.index = index
        super().__init__("Register index {} is out of range (V0-VF)".format(index))


class InvalidKey(MachineError):
    def __init__(self, key):
        self.key = key
        super().__init__("Key {} is out of range (0x0-0xF)".format(key))


class StackError(MachineError):
    pass


class StackOverflow(StackError):
    pass


class StackUnderflow(StackError):
    pass


class UnknownOpcode(MachineError):
    def __init__(self, opcode, address):
        self.opcode = opcode
        self.address = address
        super().__init__("Opcode 0x{:04x} at address 0x{:03x} is not a recognised instruction".format(opcode, address))
