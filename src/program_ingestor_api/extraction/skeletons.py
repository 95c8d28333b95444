"""
Filename-derived program skeletons.

Last-resort text used when nothing readable can be pulled out of a
document. The skeletons are written in the same line grammar the exercise
parser understands, so they flow through the normal segmentation and
parsing stages.
"""

from typing import Optional, Tuple

from ..utils import program_name_from_filename

GENERIC_SKELETON = "generic"

BENCH_PRESS_TEMPLATE = """
BENCH PRESS PROGRAM: {name}

Based on filename analysis, this appears to be a bench press focused program.

Day 1: Heavy Bench Day
Bench Press - 5 sets x 3-5 reps - Rest 3-5 minutes
Incline Bench Press - 3 sets x 6-8 reps - Rest 2-3 minutes
Close Grip Bench Press - 3 sets x 8-10 reps - Rest 2 minutes
Tricep Dips - 3 sets x 8-12 reps - Rest 90 seconds
Overhead Press - 3 sets x 6-8 reps - Rest 2 minutes

Day 2: Volume Bench Day
Bench Press - 4 sets x 8-10 reps - Rest 2-3 minutes
Incline Dumbbell Press - 3 sets x 10-12 reps - Rest 90 seconds
Decline Bench Press - 3 sets x 8-10 reps - Rest 2 minutes
Push-ups - 3 sets x 15-20 reps - Rest 60 seconds
Tricep Extensions - 3 sets x 12-15 reps - Rest 60 seconds

Day 3: Accessory Work
Dumbbell Bench Press - 3 sets x 10-12 reps - Rest 90 seconds
Chest Flyes - 3 sets x 12-15 reps - Rest 60 seconds
Diamond Push-ups - 3 sets x 8-12 reps - Rest 60 seconds
Shoulder Press - 3 sets x 10-12 reps - Rest 90 seconds
Note: Template created from the filename because the document text could not be read. Adjust exercises, weights and rep ranges to match your program.
"""

STRONGLIFTS_TEMPLATE = """
STRONGLIFTS 5X5 PROGRAM: {name}

Workout A:
Squat - 5 sets x 5 reps - Rest 3-5 minutes
Bench Press - 5 sets x 5 reps - Rest 3-5 minutes
Barbell Row - 5 sets x 5 reps - Rest 3-5 minutes

Workout B:
Squat - 5 sets x 5 reps - Rest 3-5 minutes
Overhead Press - 5 sets x 5 reps - Rest 3-5 minutes
Deadlift - 1 set x 5 reps - Rest 3-5 minutes
Note: Alternate between the two sessions and add 5lbs each time. Adjust to match your program.
"""

GENERIC_TEMPLATE = """
WORKOUT PROGRAM: {name}

Day 1: Upper Body
Bench Press - 3 sets x 8-10 reps - Rest 2-3 minutes
Pull-ups - 3 sets x 6-10 reps - Rest 2-3 minutes
Shoulder Press - 3 sets x 8-12 reps - Rest 90 seconds
Barbell Row - 3 sets x 8-10 reps - Rest 2 minutes

Day 2: Lower Body
Squat - 4 sets x 8-10 reps - Rest 3-4 minutes
Deadlift - 3 sets x 5-6 reps - Rest 3-4 minutes
Leg Press - 3 sets x 12-15 reps - Rest 90 seconds
Calf Raises - 4 sets x 15-20 reps - Rest 60 seconds
Note: Document text extraction failed. This is a generic upper/lower split, edit it with your actual exercises.
"""

# Ordered (keywords, skeleton key, template); first keyword hit in the filename wins
FILENAME_SKELETONS: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("bench",), "bench_press", BENCH_PRESS_TEMPLATE),
    (("stronglifts", "5x5"), "stronglifts", STRONGLIFTS_TEMPLATE),
)


def skeleton_for_filename(filename: str) -> Optional[Tuple[str, str]]:
    """
    Pick a keyword skeleton for a filename.

    Returns:
        (skeleton key, skeleton text) or None when no keyword matches
    """
    lowered = (filename or "").lower()
    name = program_name_from_filename(filename)

    for keywords, key, template in FILENAME_SKELETONS:
        if any(keyword in lowered for keyword in keywords):
            return key, template.format(name=name)

    return None


def generic_skeleton(filename: str) -> str:
    """Generic upper/lower split used when no keyword matches"""
    return GENERIC_TEMPLATE.format(name=program_name_from_filename(filename))
