"""
CHIP-8 Execution Engine
=======================

Fetch-decode-execute core for the CHIP-8 instruction set.

The machine has:
- 8-bit registers: V0-VF (VF doubles as carry/borrow/shift/collision flag)
- 16-bit registers: I (index), PC (program counter)
- A 16-entry return stack with stack pointer SP (next free slot)
- Delay and sound timers, decremented once per executed instruction

Each call to step() executes exactly one instruction:
    1. Fetch the big-endian word at PC
    2. Decode nibbles and operand fields
    3. Advance PC by 2
    4. Decrement non-zero timers
    5. Dispatch (jumps, calls and skips overwrite PC afterwards)

A step is never partially applied: if an instruction faults, PC and the
timers are restored to their pre-step values before the error propagates.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from ..errors import (
    EmulatorError,
    StackOverflowError,
    StackUnderflowError,
    UnimplementedInstructionError,
)
from .cartridge import Cartridge
from .display import Display
from .keypad import Keypad
from .memory import Memory, PROGRAM_START, glyph_address
from .rng import ComplementaryMultiplyWithCarry, DEFAULT_SEED

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """
    Complete register state of the machine.

    All values stored as Python ints but represent:
    - v: sixteen 8-bit unsigned values
    - i, pc: 16-bit unsigned
    - stack: sixteen 16-bit return addresses
    - sp: 0-16, index of the next free stack slot
    - delay_timer, sound_timer: 8-bit unsigned
    """
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0
    pc: int = PROGRAM_START
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    sp: int = 0
    delay_timer: int = 0
    sound_timer: int = 0


@dataclass(frozen=True)
class ExecutionResult:
    """
    Output of one executed instruction.

    Attributes:
        display: Row-major framebuffer snapshot, one byte (0/1) per pixel
        should_beep: True while the sound timer is non-zero
    """
    display: bytes
    should_beep: bool


class Cpu:
    """
    CHIP-8 interpreter core.

    Owns memory, registers, stack, timers, and exclusively owns one random
    source, one display and one keypad.

    Example:
        >>> cpu = Cpu()
        >>> cpu.load(bytes([0x60, 0x2A]))  # LD V0, $2A
        >>> result = cpu.step()
        >>> cpu.get_register(0), hex(cpu.pc)
        (42, '0x202')
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        """
        Initialize the machine in its power-on state.

        Args:
            seed: Seed for the random source used by RND
        """
        self.seed = seed
        self.memory = Memory()
        self.display = Display()
        self.keypad = Keypad()
        self.rng = ComplementaryMultiplyWithCarry(seed)
        self.state = CPUState()

    # ========================================
    # Register Properties
    # ========================================

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0xFFFF

    @property
    def i(self) -> int:
        """Index register (16-bit)."""
        return self.state.i

    @i.setter
    def i(self, value: int) -> None:
        self.state.i = value & 0xFFFF

    @property
    def sp(self) -> int:
        """Stack pointer: number of return addresses on the stack."""
        return self.state.sp

    @property
    def delay_timer(self) -> int:
        return self.state.delay_timer

    @delay_timer.setter
    def delay_timer(self, value: int) -> None:
        self.state.delay_timer = value & 0xFF

    @property
    def sound_timer(self) -> int:
        return self.state.sound_timer

    @sound_timer.setter
    def sound_timer(self, value: int) -> None:
        self.state.sound_timer = value & 0xFF

    @property
    def v(self) -> Tuple[int, ...]:
        """Read-only view of V0-VF."""
        return tuple(self.state.v)

    @property
    def stack(self) -> Tuple[int, ...]:
        """Return addresses currently on the stack, oldest first."""
        return tuple(self.state.stack[:self.state.sp])

    def get_register(self, index: int) -> int:
        return self.state.v[index]

    def set_register(self, index: int, value: int) -> None:
        self.state.v[index] = value & 0xFF

    # ========================================
    # Host Interface
    # ========================================

    def load(self, program: Union[bytes, bytearray, Cartridge]) -> None:
        """
        Copy a program into memory at $200.

        Registers are not touched.

        Raises:
            InsufficientMemoryError: If the program is larger than the
                program area; memory is left unchanged
        """
        if isinstance(program, Cartridge):
            program = program.data
        self.memory.load_program(bytes(program))

    def reset(self) -> None:
        """
        Restore the power-on state.

        Memory is zeroed with the glyphs reloaded, registers, stack and
        timers are cleared, the random source is reseeded and the display
        is cleared. Keypad state is kept.
        """
        self.memory.reset()
        self.state = CPUState()
        self.rng = ComplementaryMultiplyWithCarry(self.seed)
        self.display.clear()

    def key_down(self, key: str) -> None:
        self.keypad.key_down(key)

    def key_up(self, key: str) -> None:
        self.keypad.key_up(key)

    # ========================================
    # Main Execution Loop
    # ========================================

    def step(self) -> ExecutionResult:
        """
        Execute exactly one instruction.

        Returns:
            ExecutionResult with the framebuffer snapshot and tone flag

        Raises:
            UnimplementedInstructionError: Unknown opcode
            StackOverflowError, StackUnderflowError: Bad CALL/RET nesting
            MemoryAccessError: Access outside $000-$FFF
        """
        state = self.state
        pc = state.pc
        opcode = self.memory.read_word(pc, pc)

        saved_timers = (state.delay_timer, state.sound_timer)
        self.pc = pc + 2
        self._update_timers()

        try:
            self._execute_instruction(opcode, pc)
        except EmulatorError:
            state.pc = pc
            state.delay_timer, state.sound_timer = saved_timers
            raise

        return ExecutionResult(self.display.snapshot(), state.sound_timer > 0)

    def _update_timers(self) -> None:
        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # ========================================
    # Stack Operations
    # ========================================

    def _push(self, value: int, pc: int) -> None:
        state = self.state
        if state.sp >= STACK_DEPTH:
            raise StackOverflowError(pc)
        state.stack[state.sp] = value
        state.sp += 1

    def _pop(self, pc: int) -> int:
        state = self.state
        if state.sp == 0:
            raise StackUnderflowError(pc)
        state.sp -= 1
        return state.stack[state.sp]

    def _skip_if(self, condition: bool) -> None:
        """Skip the next instruction when condition holds."""
        if condition:
            self.pc = self.state.pc + 2

    # ========================================
    # Instruction Dispatch
    # ========================================

    def _execute_instruction(self, opcode: int, pc: int) -> None:
        """
        Decode and execute one instruction word.

        Args:
            opcode: 16-bit instruction word
            pc: Address the word was fetched from (for error reports)
        """
        v = self.state.v

        x = (opcode & 0x0F00) >> 8
        y = (opcode & 0x00F0) >> 4
        n = opcode & 0x000F
        kk = opcode & 0x00FF
        nnn = opcode & 0x0FFF
        vx = v[x]
        vy = v[y]

        match ((opcode & 0xF000) >> 12, x, y, n):
            case (0x0, 0x0, 0xE, 0x0):  # CLS
                self.display.clear()

            case (0x0, 0x0, 0xE, 0xE):  # RET
                self.pc = self._pop(pc)

            case (0x1, _, _, _):  # JP addr
                self.pc = nnn

            case (0x2, _, _, _):  # CALL addr
                # PC already points at the instruction after the CALL
                self._push(self.state.pc, pc)
                self.pc = nnn

            case (0x3, _, _, _):  # SE Vx, byte
                self._skip_if(vx == kk)

            case (0x4, _, _, _):  # SNE Vx, byte
                self._skip_if(vx != kk)

            case (0x5, _, _, 0x0):  # SE Vx, Vy
                self._skip_if(vx == vy)

            case (0x6, _, _, _):  # LD Vx, byte
                v[x] = kk

            case (0x7, _, _, _):  # ADD Vx, byte (no carry)
                v[x] = (vx + kk) & 0xFF

            case (0x8, _, _, 0x0):  # LD Vx, Vy
                v[x] = vy

            case (0x8, _, _, 0x1):  # OR Vx, Vy
                v[x] = vx | vy

            case (0x8, _, _, 0x2):  # AND Vx, Vy
                v[x] = vx & vy

            case (0x8, _, _, 0x3):  # XOR Vx, Vy
                v[x] = vx ^ vy

            case (0x8, _, _, 0x4):  # ADD Vx, Vy
                total = vx + vy
                v[x] = total & 0xFF
                v[FLAG_REGISTER] = 1 if total > 0xFF else 0

            case (0x8, _, _, 0x5):  # SUB Vx, Vy (VF = NOT borrow)
                v[x] = (vx - vy) & 0xFF
                v[FLAG_REGISTER] = 1 if vx > vy else 0

            case (0x8, _, _, 0x6):  # SHR Vx
                v[x] = vx >> 1
                v[FLAG_REGISTER] = vx & 0x1

            case (0x8, _, _, 0x7):  # SUBN Vx, Vy (VF = NOT borrow)
                v[x] = (vy - vx) & 0xFF
                v[FLAG_REGISTER] = 1 if vy > vx else 0

            case (0x8, _, _, 0xE):  # SHL Vx
                v[x] = (vx << 1) & 0xFF
                v[FLAG_REGISTER] = (vx >> 7) & 0x1

            case (0x9, _, _, 0x0):  # SNE Vx, Vy
                self._skip_if(vx != vy)

            case (0xA, _, _, _):  # LD I, addr
                self.i = nnn

            case (0xB, _, _, _):  # JP V0, addr
                self.pc = nnn + v[0]

            case (0xC, _, _, _):  # RND Vx, byte
                v[x] = self.rng.random_byte() & kk

            case (0xD, _, _, _):  # DRW Vx, Vy, nibble
                sprite = self.memory.read_block(self.state.i, n, pc)
                collision = self.display.draw_sprite(vx, vy, sprite)
                v[FLAG_REGISTER] = 1 if collision else 0

            case (0xE, _, 0x9, 0xE):  # SKP Vx
                self._skip_if(self.keypad.is_pressed(vx))

            case (0xE, _, 0xA, 0x1):  # SKNP Vx
                self._skip_if(not self.keypad.is_pressed(vx))

            case (0xF, _, 0x0, 0x7):  # LD Vx, DT
                v[x] = self.state.delay_timer

            case (0xF, _, 0x0, 0xA):  # LD Vx, K
                idx = self.keypad.first_pressed_index()
                if idx is None:
                    # Re-execute this instruction on the next step
                    self.pc = pc
                else:
                    v[x] = idx

            case (0xF, _, 0x1, 0x5):  # LD DT, Vx
                self.delay_timer = vx

            case (0xF, _, 0x1, 0x8):  # LD ST, Vx
                self.sound_timer = vx

            case (0xF, _, 0x1, 0xE):  # ADD I, Vx
                self.i = self.state.i + vx

            case (0xF, _, 0x2, 0x9):  # LD F, Vx
                self.i = glyph_address(vx)

            case (0xF, _, 0x3, 0x3):  # LD B, Vx
                self.memory.write_block(
                    self.state.i, (vx // 100, (vx // 10) % 10, vx % 10), pc
                )

            case (0xF, _, 0x5, 0x5):  # LD [I], Vx
                self.memory.write_block(self.state.i, v[0:x + 1], pc)

            case (0xF, _, 0x6, 0x5):  # LD Vx, [I]
                v[0:x + 1] = self.memory.read_block(self.state.i, x + 1, pc)

            case _:
                raise UnimplementedInstructionError(opcode, pc)

    def __repr__(self) -> str:
        return f"Cpu(pc=${self.state.pc:04X}, i=${self.state.i:04X}, sp={self.state.sp})"
