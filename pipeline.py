#!/usr/bin/env python3
# filename: pipeline.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.2.0 (Explicit converter tables)
# -----------------------------------------------------------------------------
"""
Builds converters from configuration and runs them against one Container.
The pipeline owns its converter tables; nothing registers itself globally.
"""

from typing import Any, Callable, Dict, List

from container import Container
from converters import InputConverter, OutputConverter
from errors import ConfigurationError
from region_mapping import TYPE_REGION_MAPPING_IN, DESC_REGION_MAPPING_IN, new_region_mapping_in
from text_in import TYPE_TEXT_IN, DESC_TEXT_IN, new_text_in
from text_out import TYPE_TEXT_OUT, DESC_TEXT_OUT, new_text_out
from utils import get_logger

logger = get_logger("Pipeline")

Factory = Callable[[Any, dict], Any]


def default_input_factories() -> Dict[str, Factory]:
    return {
        TYPE_TEXT_IN: new_text_in,
        TYPE_REGION_MAPPING_IN: new_region_mapping_in,
    }


def default_output_factories() -> Dict[str, Factory]:
    return {
        TYPE_TEXT_OUT: new_text_out,
    }


def describe_converters() -> Dict[str, Dict[str, str]]:
    """Type -> description for every built-in converter."""
    return {
        'input': {
            TYPE_TEXT_IN: DESC_TEXT_IN,
            TYPE_REGION_MAPPING_IN: DESC_REGION_MAPPING_IN,
        },
        'output': {
            TYPE_TEXT_OUT: DESC_TEXT_OUT,
        },
    }


class Pipeline:
    def __init__(self, input_factories: Dict[str, Factory] = None,
                 output_factories: Dict[str, Factory] = None):
        self.input_factories = dict(input_factories if input_factories is not None else default_input_factories())
        self.output_factories = dict(output_factories if output_factories is not None else default_output_factories())
        self.inputs: List[InputConverter] = []
        self.outputs: List[OutputConverter] = []

    def build(self, config: dict) -> "Pipeline":
        """Instantiate every converter listed in config['input'] and config['output']."""
        self.inputs = [self._create(self.input_factories, 'input', i, item)
                       for i, item in enumerate(config.get('input') or [])]
        self.outputs = [self._create(self.output_factories, 'output', i, item)
                        for i, item in enumerate(config.get('output') or [])]
        logger.info(f"Pipeline ready: {len(self.inputs)} input(s), {len(self.outputs)} output(s)")
        return self

    def run(self, container: Container = None) -> Container:
        """Run all inputs in order, then all outputs. Stops at the first error."""
        container = container if container is not None else Container()

        for converter in self.inputs:
            logger.info(f">>> Input [{converter.get_type()} | {converter.get_action()}]")
            result = converter.input(container)
            if result is not None:
                container = result

        for converter in self.outputs:
            logger.info(f">>> Output [{converter.get_type()} | {converter.get_action()}]")
            converter.output(container)

        logger.info(f"Done: {len(container)} entries in container")
        return container

    @staticmethod
    def _create(factories: Dict[str, Factory], section: str, index: int, item: Any):
        if not isinstance(item, dict):
            raise ConfigurationError(f"{section}[{index}]: must be a mapping")

        type_name = item.get('type')
        factory = factories.get(type_name)
        if factory is None:
            raise ConfigurationError(
                f"{section}[{index}]: unknown type '{type_name}', must be one of {sorted(factories)}"
            )

        return factory(item.get('action'), item.get('args'))
