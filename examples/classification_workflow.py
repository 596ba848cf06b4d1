"""
Complete Classification Workflow Example

Demonstrates the full learner classification pipeline:
1. Create a classification service for a learner context
2. Run the learning style questionnaire
3. Review the resolved style and choose an age band
4. Confirm and persist the classification
5. Adapt content for the stored classification
6. Edit preferences directly and reset
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config
from src.models.learning_style import AgeBand, StyleCategory
from src.orchestrator import LearnerClassificationService
from src.utils.logging_utils import configure_logging


def main():
    configure_logging()
    config.prepare_fs()

    # ==================== Step 1: Create Service ====================
    print("=" * 60)
    print("STEP 1: Creating Classification Service")
    print("=" * 60)

    service = LearnerClassificationService(learner_id="alice")
    summary = service.describe()

    print(f"✓ Learner context: {service.learner_id}")
    print(f"  Persistence: {config.classification.persistence_backend}")
    print(f"  Current style: {summary['style_label']} ({summary['age_band_label']})")
    print()

    # ==================== Step 2: Questionnaire ====================
    print("=" * 60)
    print("STEP 2: Answering the Questionnaire")
    print("=" * 60)

    service.start_session()
    chosen = ["visual", "visual", "kinesthetic", "visual", "reading"]

    for item, option_id in zip(service.item_bank(), chosen):
        option = item.option(option_id)
        service.record_answer(item.id, option_id)
        answered, total = service.progress()
        print(f"[{answered}/{total}] {item.prompt}")
        print(f"      → {option.text}")
    print()

    # ==================== Step 3: Review Result ====================
    print("=" * 60)
    print("STEP 3: Reviewing the Result")
    print("=" * 60)

    result = service.get_resolved()
    print(f"✓ Resolved style: {result.style.label}")
    print(f"  Confidence: {result.confidence}%")
    for style, votes in result.tally.items():
        print(f"  {style.label:<26} {votes} vote(s)")

    service.select_age_band(AgeBand.SECONDARY)
    print(f"  Age band: {AgeBand.SECONDARY.label} ({AgeBand.SECONDARY.age_range})")
    print()

    # ==================== Step 4: Confirm ====================
    print("=" * 60)
    print("STEP 4: Confirming the Classification")
    print("=" * 60)

    record = service.confirm()
    print(f"✓ Saved: {record.to_dict()}")
    print()

    # ==================== Step 5: Adapt Content ====================
    print("=" * 60)
    print("STEP 5: Adapting Content")
    print("=" * 60)

    lesson = {"title": "Photosynthesis", "body": "Plants convert light into chemical energy."}
    adapted = service.adapt(lesson)
    directive = adapted.directive

    print(f"✓ Adapted: {adapted.adapted}")
    print(f"  Style flags: {sorted(flag.value for flag in directive.style_flags)}")
    print(f"  Complexity: {directive.complexity_level.value}")
    print(f"  Visual ratio: {directive.visual_ratio:.0%}")
    print()

    # ==================== Step 6: Preferences ====================
    print("=" * 60)
    print("STEP 6: Editing Preferences")
    print("=" * 60)

    edited = service.set_learning_style(StyleCategory.MULTIMODAL)
    print(f"✓ Style set to {edited.style.label} (confidence kept at {edited.confidence}%)")

    service.reset()
    print(f"✓ Reset: {service.describe()['style_label']}")
    print()

    print("=" * 60)
    print("WORKFLOW COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
