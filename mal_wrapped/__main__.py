"""Entry point for year-in-review generation"""
import json
import logging
import os
import sys
import traceback

from mal_wrapped.config import settings
from mal_wrapped.wrapped import Wrapped

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def run() -> None:
    """Generate the report and write it to OUTPUT_DIR/results.json."""
    try:
        # Log config (excluding sensitive data)
        logger.info("Using configuration:")
        safe_config = settings.model_dump(exclude={'MAL_ACCESS_TOKEN'})
        logger.info(json.dumps(safe_config, indent=2))

        wrapped = Wrapped(settings)
        report = wrapped.generate()

        os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
        output_path = os.path.join(settings.OUTPUT_DIR, "results.json")
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report.model_dump(), f, indent=2, ensure_ascii=False)

        if not report.valid:
            raise RuntimeError(f"Wrapped generation failed: {report.attributes.get('error')}")
        logger.info(f"Wrapped generation complete: {output_path}")

    except Exception as e:
        logger.error(f"Error during wrapped generation: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    run()
