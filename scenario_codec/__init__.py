#  Copyright 2025 $author, All rights reserved.
from .scenario import (TimeUnit, StepRecord, StepParameters, ScenarioData, MIN_STEPS, MAX_STEPS,
                       SCENARIO_VERSION, DEFAULT_BATCH_SIZE, generate_scenario_code, parse_scenario_code,
                       is_valid_scenario_code, encode_scenario, apply_scenario, minimum_code_length)
