"""Built-in IEEE 802.15.4 MAC frame layouts."""

from collections.abc import Callable
from dataclasses import dataclass, field

from . import python
from .alternatives import AlternativesRegistry
from .types import AlternativeGroup, BitfieldSchema, StructureSchema


@dataclass(frozen=True)
class Frame:
    """A named set of schemas rendered into one module."""

    name: str
    description: str
    bitfields: tuple[BitfieldSchema, ...] = ()
    structures: tuple[StructureSchema, ...] = ()
    registry: AlternativesRegistry = field(default_factory=AlternativesRegistry)

    def render(self, runtime_import: str = "bitlayout.runtime") -> str:
        return python.render(
            self.structures,
            self.registry,
            self.bitfields,
            comments=[f"{self.name}: {self.description}"],
            runtime_import=runtime_import,
        )


def frame_control() -> BitfieldSchema:
    """The 16-bit MAC frame control field."""
    return (
        BitfieldSchema(
            "Frame_control",
            "This field contains information about the frame type, addressing and control flags.",
        )
        .add_bit_field(
            "Frame_type",
            "This field contains information about the frame type, addressing and control flags.",
            3,
            lambda v: v.add_enum_value("Beacon", 0b000)
            .add_enum_value("Data", 0b001)
            .add_enum_value("Acknowledgement", 0b010)
            .add_enum_value("MAC_command", 0b011),
        )
        .add_bit_field(
            "Security_enabled",
            "Specifies if the frame is encrypted using the key stored in the PIB.",
            1,
            lambda v: v.add_enum_value("Unencrypted", 0).add_enum_value("Encrypted", 1),
        )
        .add_bit_field(
            "Frame_pending",
            "Specifies if the sender has additional data to send to the recipient.",
            1,
            lambda v: v.add_enum_value("No_frame_pending", 0).add_enum_value("Frame_pending", 1),
        )
        .add_bit_field(
            "Ack_request",
            "Specifies whether an acknowledgement is required from the recipient device.",
            1,
            lambda v: v.add_enum_value("Ack_not_requested", 0).add_enum_value("Ack_requested", 1),
        )
        .add_bit_field(
            "Intra_PAN",
            "Specifies whether the MAC frame is to be sent within the same PAN.",
            1,
            lambda v: v.add_enum_value("Pan_present", 0).add_enum_value("Inter_pan", 1),
        )
        .add_reserved(3)
        .add_bit_field(
            "Dest_addr_mode",
            "Specifies the type of the destination address.",
            2,
            lambda v: v.add_enum_value("Not_present", 0)
            .add_enum_value("Address_16bit", 1)
            .add_enum_value("Address_64bit_extended", 3),
        )
        .add_reserved(2)
        .add_bit_field(
            "Source_addr_mode",
            "Specifies the type of the source address.",
            2,
            lambda v: v.add_enum_value("Not_present", 0)
            .add_enum_value("Address_16bit", 1)
            .add_enum_value("Address_64bit_extended", 3),
        )
    )


def frame_control_frame() -> Frame:
    return Frame(
        name="frame-control",
        description="MAC frame control register",
        bitfields=(frame_control(),),
    )


def mac_frame() -> Frame:
    """The MAC header with its PAN identifier and address alternatives."""
    addr_none = StructureSchema("addr_none")
    addr_short = StructureSchema("addr_short").add_u16_field("address")
    addr_extended = StructureSchema("addr_extended").add_u64_field("address")

    pan_none = StructureSchema("pan_none")
    pan_short = StructureSchema("pan_short").add_u16_field("pan")

    address = (
        AlternativeGroup.new("address", addr_none)
        .insert_struct(addr_short)
        .insert_struct(addr_extended)
    )
    panid = AlternativeGroup.new("panid", pan_none).insert_struct(pan_short)

    mhr = (
        StructureSchema("mhr", description="MAC header.")
        .add_bitfield("frame_control", frame_control(), 2)
        .add_u8_field("sequence_number")
        .add_alt_field("dest_pan", panid)
        .add_alt_field("dest_address", address)
        .add_alt_field("source_pan", panid)
        .add_alt_field("source_address", address)
    )

    return Frame(
        name="mac",
        description="MAC header",
        structures=(mhr,),
        registry=AlternativesRegistry().insert(address).insert(panid),
    )


FRAMES: dict[str, Callable[[], Frame]] = {
    "frame-control": frame_control_frame,
    "mac": mac_frame,
}
