#  Copyright 2025 $author, All rights reserved.
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence, Union

from .bitstream import Bitstream
from .errors import ScenarioCodeError, EmptyCodeError, UnsupportedVersionError, InvalidTimeUnitError
from .text_transform import bits_to_text, text_to_bits, SYMBOL_BITS
from .utilities import clamp, clean_code, max_value_for_width

# Version 1 layout
# Header:
#  - Version:    2 bits (1)
#  - Time unit:  2 bits (0=Seconds, 1=Minutes, 2=Hours, 3 is reserved)
#  - Step count: 2 bits (count - MIN_STEPS)
#  - Batch size: 6 bits, shared by all steps
#  - Batch lock: 1 bit, shared by all steps
# Body, per step:
#  - Cycle time: 5 bits
#  - Setup time: 7 bits
#  - Cycle lock: 1 bit
#  - Setup lock: 1 bit
# There is no checksum, a different layout needs a new version.
SCENARIO_VERSION = 1
MIN_STEPS = 2
MAX_STEPS = 5
DEFAULT_BATCH_SIZE = 10

VERSION_BITS = 2
TIME_UNIT_BITS = 2
STEP_COUNT_BITS = 2
BATCH_SIZE_BITS = 6
FLAG_BITS = 1
CYCLE_TIME_BITS = 5
SETUP_TIME_BITS = 7

HEADER_BITS = VERSION_BITS + TIME_UNIT_BITS + STEP_COUNT_BITS + BATCH_SIZE_BITS + FLAG_BITS
STEP_BITS = CYCLE_TIME_BITS + SETUP_TIME_BITS + 2 * FLAG_BITS

class TimeUnit(str, Enum):
    SECONDS = "Seconds"
    MINUTES = "Minutes"
    HOURS = "Hours"

# Wire index of each unit is its position here
_time_units: list[TimeUnit] = [TimeUnit.SECONDS, TimeUnit.MINUTES, TimeUnit.HOURS]

@dataclass
class StepRecord:
    cycle_time: int = 0
    setup_time: int = 0
    is_cycle_locked: bool = False
    is_setup_locked: bool = False
    def to_json(self) -> dict[str, object]:
        return {
            "cycleTime": self.cycle_time,
            "setupTime": self.setup_time,
            "isCycleLocked": self.is_cycle_locked,
            "isSetupLocked": self.is_setup_locked,
        }

@dataclass
class StepParameters(StepRecord):
    """
    Step as edited by the user. Batch size and lock are entered per step, but only the
    first step's values are stored in a scenario code.
    """
    batch_size: int = DEFAULT_BATCH_SIZE
    is_batch_locked: bool = False
    def to_json(self) -> dict[str, object]:
        result = super().to_json()
        result["batchSize"] = self.batch_size
        result["isBatchLocked"] = self.is_batch_locked
        return result
    @classmethod
    def from_json(cls, data: Mapping[str, object]) -> 'StepParameters':
        return cls(int(data.get("cycleTime", 0)),
                   int(data.get("setupTime", 0)),
                   bool(data.get("isCycleLocked", False)),
                   bool(data.get("isSetupLocked", False)),
                   int(data.get("batchSize", DEFAULT_BATCH_SIZE)),
                   bool(data.get("isBatchLocked", False)))

@dataclass
class ScenarioData:
    time_unit: TimeUnit
    steps: list[StepRecord] = field(default_factory=list)
    global_batch_size: int = DEFAULT_BATCH_SIZE
    global_batch_locked: bool = False
    def to_json(self) -> dict[str, object]:
        return {
            "timeUnit": self.time_unit.value,
            "steps": [step.to_json() for step in self.steps],
            "globalBatchSize": self.global_batch_size,
            "globalBatchLocked": self.global_batch_locked,
        }
    @classmethod
    def from_json(cls, data: Mapping[str, object]) -> 'ScenarioData':
        steps = [StepRecord(int(step.get("cycleTime", 0)),
                            int(step.get("setupTime", 0)),
                            bool(step.get("isCycleLocked", False)),
                            bool(step.get("isSetupLocked", False)))
                 for step in data.get("steps", [])]
        return cls(TimeUnit(data["timeUnit"]), steps,
                   int(data.get("globalBatchSize", DEFAULT_BATCH_SIZE)),
                   bool(data.get("globalBatchLocked", False)))

def minimum_code_length(step_count: int) -> int:
    """
    Number of characters in the code for step_count steps, counts outside the supported range
    are clamped the same way encoding does.
    """
    bits = HEADER_BITS + clamp(step_count, MIN_STEPS, MAX_STEPS) * STEP_BITS
    return math.ceil(bits / SYMBOL_BITS)

def _fit_steps(steps: Sequence[StepRecord]) -> list[StepRecord]:
    # The header can only describe MIN_STEPS..MAX_STEPS steps, keep the body in line with it.
    fitted = list(steps[:MAX_STEPS])
    while len(fitted) < MIN_STEPS:
        fitted.append(StepRecord())
    return fitted

def generate_scenario_code(steps: Sequence[StepRecord], time_unit: Union[TimeUnit, str]) -> str:
    """
    Encode steps into a scenario code. Values that do not fit their field are clamped,
    batch size and lock are taken from the first step.
    :param steps: StepParameters, or any StepRecord, in line order
    :param time_unit: The unit all step times are given in
    :return: The URL safe scenario code
    """
    time_unit = TimeUnit(time_unit)
    # Body always holds exactly the header step count, short lists are padded with zeroed steps
    fitted = _fit_steps(steps)
    first = steps[0] if len(steps) > 0 else None
    # Zero is not a usable batch size, treat it like a missing one
    batch_size = getattr(first, "batch_size", None) or DEFAULT_BATCH_SIZE
    batch_locked = getattr(first, "is_batch_locked", False)

    bitstream = Bitstream()
    bitstream.append(VERSION_BITS, SCENARIO_VERSION)
    bitstream.append(TIME_UNIT_BITS, _time_units.index(time_unit))
    bitstream.append(STEP_COUNT_BITS, len(fitted) - MIN_STEPS)
    bitstream.append(BATCH_SIZE_BITS, clamp(batch_size, 0, max_value_for_width(BATCH_SIZE_BITS)))
    bitstream.append(FLAG_BITS, 1 if batch_locked else 0)

    for step in fitted:
        bitstream.append(CYCLE_TIME_BITS, clamp(step.cycle_time, 0, max_value_for_width(CYCLE_TIME_BITS)))
        bitstream.append(SETUP_TIME_BITS, clamp(step.setup_time, 0, max_value_for_width(SETUP_TIME_BITS)))
        bitstream.append(FLAG_BITS, 1 if step.is_cycle_locked else 0)
        bitstream.append(FLAG_BITS, 1 if step.is_setup_locked else 0)
    return bits_to_text(bitstream)

def read_scenario(bitstream: Bitstream) -> ScenarioData:
    """
    Read a scenario from bitstream, raises a ScenarioCodeError subclass for anything that
    is not a complete version 1 scenario. Trailing padding bits are ignored.
    """
    version = bitstream.read(VERSION_BITS)
    if version != SCENARIO_VERSION:
        raise UnsupportedVersionError(f"Unsupported scenario version {version}")
    unit_index = bitstream.read(TIME_UNIT_BITS)
    if unit_index >= len(_time_units):
        raise InvalidTimeUnitError(f"Invalid time unit {unit_index}")
    time_unit = _time_units[unit_index]
    step_count = bitstream.read(STEP_COUNT_BITS) + MIN_STEPS
    batch_size = bitstream.read(BATCH_SIZE_BITS)
    batch_locked = bitstream.read(FLAG_BITS) == 1

    steps = []
    for _ in range(step_count):
        cycle_time = bitstream.read(CYCLE_TIME_BITS)
        setup_time = bitstream.read(SETUP_TIME_BITS)
        is_cycle_locked = bitstream.read(FLAG_BITS) == 1
        is_setup_locked = bitstream.read(FLAG_BITS) == 1
        steps.append(StepRecord(cycle_time, setup_time, is_cycle_locked, is_setup_locked))
    return ScenarioData(time_unit, steps, batch_size, batch_locked)

def parse_scenario_code(code: str) -> Optional[ScenarioData]:
    """
    Decode a scenario code, whitespace anywhere in it is ignored.
    :param code: The code as entered or pasted by the user
    :return: The scenario, or None if the code is not a valid scenario code
    """
    if not isinstance(code, str):
        return None
    try:
        cleaned = clean_code(code)
        if not cleaned:
            raise EmptyCodeError("Empty scenario code")
        return read_scenario(text_to_bits(cleaned))
    except ScenarioCodeError:
        # Codes are validated while being typed, every failure is just "not valid (yet)".
        return None

def is_valid_scenario_code(code: str) -> bool:
    return parse_scenario_code(code) is not None

def apply_scenario(scenario: ScenarioData) -> list[StepParameters]:
    """
    Expand a decoded scenario into editable steps, every step gets the shared batch values.
    """
    return [StepParameters(step.cycle_time, step.setup_time, step.is_cycle_locked, step.is_setup_locked,
                           scenario.global_batch_size, scenario.global_batch_locked)
            for step in scenario.steps]

def encode_scenario(scenario: ScenarioData) -> str:
    return generate_scenario_code(apply_scenario(scenario), scenario.time_unit)

def load_steps(items: Iterable[Mapping[str, object]]) -> list[StepParameters]:
    return [StepParameters.from_json(item) for item in items]
