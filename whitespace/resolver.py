import logging

from .errors import DuplicateLabel, UndefinedLabel
from .instructions import DefineLabel, LabelReference

logger = logging.getLogger(__name__)


def label_table(instructions, strict=False):
    table = {}
    index = 0
    for instruction in instructions:
        if isinstance(instruction, DefineLabel):
            if instruction.argument in table:
                if strict:
                    raise DuplicateLabel(instruction.argument)
                logger.warning('Label %d redefined, the last definition wins', instruction.argument)
            table[instruction.argument] = index
        else:
            index += 1
    return table


def resolve(instructions, strict=False):
    """
    Drops label definitions and rewrites every label reference into
    the index of the instruction the label precedes.

    With strict set, a label defined twice is an error instead of
    silently resolving to its last definition.
    """
    table = label_table(instructions, strict)
    resolved = []
    for instruction in instructions:
        if isinstance(instruction, DefineLabel):
            continue
        if isinstance(instruction, LabelReference):
            if instruction.argument not in table:
                raise UndefinedLabel(instruction.argument)
            instruction = instruction.retarget(table[instruction.argument])
        resolved.append(instruction)
    logger.debug('Resolved %d labels into %d instructions', len(table), len(resolved))
    return resolved
