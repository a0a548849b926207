"""
Argument binder for formscan

Stores converted values into caller-provided output slots, narrowing them
to the storage size selected by the conversion's length modifier.

Sizing, by the slot type registered for the specifier:
    IntSlot (d, x, b):  NONE/j/z/t -> 32, hh -> 8, h -> 16, l -> 64, ll -> 64
    FloatSlot (f):      l/ll -> 64, otherwise 32
    other slots (c, s, L, D, R) ignore length modifiers
"""

import struct
from typing import Any, Dict, List, Optional

from ..models.directives import Conversion, Directive, LengthModifier
from ..models.slots import CharSlot, FloatSlot, IntSlot
from .log import LOG


class SlotError(TypeError):
    """A slot is missing or cannot hold the value of its conversion"""


INTEGER_BITS: Dict[LengthModifier, int] = {
    LengthModifier.SIGNED_BYTE: 8,
    LengthModifier.SHORT: 16,
    LengthModifier.LONG: 64,
    LengthModifier.LONG_LONG: 64,
}

DOUBLE_MODIFIERS = {LengthModifier.LONG, LengthModifier.LONG_LONG}


class ArgumentBinder:
    """
    Binds successful conversions to output slots

    Slots are matched positionally against non-suppressed conversions.
    Extra slots are ignored; missing or mistyped slots raise SlotError.
    """

    def __init__(self, registry=None) -> None:
        if registry is None:
            from .specifiers import SpecifierRegistry
            registry = SpecifierRegistry()
        self.registry = registry

    def bits_select(self, conversion: Conversion) -> Optional[int]:
        """
        Storage width for a conversion

        Returns:
            Bit width for integer and float conversions, None for
            conversions whose slots are not sized
        """
        spec = self.registry.spec_get(conversion.specifier)
        slot_type = spec.slot_type if spec else None
        if slot_type is IntSlot:
            if not conversion.length_mod.affects_sizing:
                return 32
            return INTEGER_BITS[conversion.length_mod]
        if slot_type is FloatSlot:
            return 64 if conversion.length_mod in DOUBLE_MODIFIERS else 32
        return None

    def value_narrow(self, value: Any, bits: int, signed: bool = True) -> int:
        """
        Wrap an integer into a two's-complement field

        Example:
            >>> ArgumentBinder().value_narrow(200, 8)
            -56
            >>> ArgumentBinder().value_narrow(-1, 16, signed=False)
            65535
        """
        mask = (1 << bits) - 1
        value &= mask
        if signed and value >> (bits - 1):
            value -= 1 << bits
        return value

    def float_narrow(self, value: float, bits: int) -> float:
        """Round a float to single precision when bits is 32"""
        if bits == 32:
            try:
                return struct.unpack("f", struct.pack("f", value))[0]
            except OverflowError:
                return float("inf") if value > 0 else float("-inf")
        return value

    def bind(self, conversion: Conversion, value: Any, slots: List[Any], index: int) -> None:
        """
        Store a converted value into slots[index]

        Args:
            conversion: The conversion that produced the value
            value: Value returned by the scalar reader
            slots: Caller's output slots
            index: Position of this conversion among non-suppressed ones

        Raises:
            SlotError: Missing slot, wrong slot type or size
        """
        if index >= len(slots):
            raise SlotError(
                f"No output slot for conversion {index + 1} ('{conversion.text}'), "
                f"only {len(slots)} provided"
            )
        slot = slots[index]
        spec = self.registry.spec_get(conversion.specifier)
        if spec is None:
            raise SlotError(f"No specifier registered for '{conversion.text}'")
        if not isinstance(slot, spec.slot_type):
            raise SlotError(
                f"Conversion '{conversion.text}' needs {spec.slot_type.__name__}, "
                f"got {type(slot).__name__}"
            )

        bits = self.bits_select(conversion)
        if isinstance(slot, IntSlot):
            self.bits_check(conversion, slot, bits)
            slot.value = self.value_narrow(value, bits, slot.signed)
        elif isinstance(slot, FloatSlot):
            self.bits_check(conversion, slot, bits)
            slot.value = self.float_narrow(value, bits)
        elif isinstance(slot, CharSlot):
            if len(value) > slot.size:
                raise SlotError(
                    f"Conversion '{conversion.text}' reads {len(value)} characters "
                    f"into a block of {slot.size}"
                )
            slot.buffer[:len(value)] = list(value)
        else:
            slot.value = value
        LOG(f"Bound {conversion.text} -> {value!r}", level=3)

    def bits_check(self, conversion: Conversion, slot: Any, bits: Optional[int]) -> None:
        if slot.bits != bits:
            raise SlotError(
                f"Conversion '{conversion.text}' stores {bits}-bit values, "
                f"slot holds {slot.bits} bits"
            )

    def slots_make(self, directives: List[Directive]) -> List[Any]:
        """
        Build default slots for every non-suppressed conversion

        Integer slots take the specifier's signedness (%x and %b unsigned);
        %c blocks are sized to the width.
        """
        slots: List[Any] = []
        for directive in directives:
            if not isinstance(directive, Conversion) or directive.suppressed:
                continue
            spec = self.registry.spec_get(directive.specifier)
            if spec is None:
                continue
            if spec.slot_type is IntSlot:
                slots.append(IntSlot(bits=self.bits_select(directive), signed=spec.signed))
            elif spec.slot_type is FloatSlot:
                slots.append(FloatSlot(bits=self.bits_select(directive)))
            elif spec.slot_type is CharSlot:
                slots.append(CharSlot.sized(directive.width or 1))
            else:
                slots.append(spec.slot_type())
        return slots
