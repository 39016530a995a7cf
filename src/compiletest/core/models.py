"""Core dataclasses shared across compiletest subsystems."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Sequence, Tuple


TestCase = Any  # Opaque parsed suite entry, handed to the compiler untouched.


class Register(Enum):
    """x86-64 general purpose registers."""

    RAX = "rax"
    RBX = "rbx"
    RCX = "rcx"
    RDX = "rdx"
    RSI = "rsi"
    RDI = "rdi"
    RBP = "rbp"
    RSP = "rsp"
    R8 = "r8"
    R9 = "r9"
    R10 = "r10"
    R11 = "r11"
    R12 = "r12"
    R13 = "r13"
    R14 = "r14"
    R15 = "r15"

    @classmethod
    def parse(cls, name: str) -> "Register":
        text = str(name).strip().lower()
        for register in cls:
            if register.value == text:
                return register
        raise ValueError(f"Unknown register '{name}'")


@dataclass(frozen=True)
class CompilerConfig:
    """Register assignment handed to the compiler unchanged."""

    frame_pointer_register: Register = Register.RBP
    allocation_pointer_register: Register = Register.RDX
    return_address_register: Register = Register.R15
    return_value_register: Register = Register.RAX
    parameter_registers: Tuple[Register, ...] = (Register.R8, Register.R9)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "frame_pointer_register": self.frame_pointer_register.value,
            "allocation_pointer_register": self.allocation_pointer_register.value,
            "return_address_register": self.return_address_register.value,
            "return_value_register": self.return_value_register.value,
            "parameter_registers": [reg.value for reg in self.parameter_registers],
        }


@dataclass(frozen=True)
class TestSet:
    """The two ordered groups of cases read from a suite file."""

    __test__ = False

    valid: Tuple[TestCase, ...]
    invalid: Tuple[TestCase, ...]

    @classmethod
    def of(cls, valid: Sequence[TestCase], invalid: Sequence[TestCase]) -> "TestSet":
        return cls(valid=tuple(valid), invalid=tuple(invalid))


DEFAULT_CONFIG = CompilerConfig()
DEFAULT_TEST_FILE = "test-suite.ss"
