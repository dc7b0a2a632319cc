"""
Configuration and resource loader.

Loads the YAML document templates from the config directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from memorial.resources.document_template import DocumentTemplate

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Loads configuration files and keeps the resulting resources.

    This is the standard way to bootstrap the planner with its
    document templates.
    """

    def __init__(self, config_dir: Path | str | None = None):
        # Default to config/ directory relative to this file's parent
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = Path(config_dir)
        self.templates: dict[str, DocumentTemplate] = {}

    def load_all(self) -> dict[str, int]:
        """
        Load all configuration files.

        Returns:
            Dict with counts of each type loaded
        """
        counts = {"templates": 0}

        templates_dir = self.config_dir / "templates"
        if templates_dir.exists():
            for pattern in ("*.yaml", "*.yml"):
                for path in sorted(templates_dir.glob(pattern)):
                    self.load_document_template(path)
                    counts["templates"] += 1
        else:
            logger.warning("No templates directory at %s", templates_dir)

        return counts

    def load_document_template(self, path: Path | str) -> DocumentTemplate:
        """Load a document template from YAML."""
        template = DocumentTemplate.from_yaml(path)
        if template.resource_id in self.templates:
            logger.warning("Template '%s' in %s replaces an earlier one", template.resource_id, path)
        self.templates[template.resource_id] = template
        logger.debug("Loaded document template %r", template)
        return template

    def get_document_template(self, template_id: str) -> DocumentTemplate:
        """
        Get a loaded template by ID.

        Falls back to the built-in defaults when no such template was
        loaded, so a missing config directory still yields documents.
        """
        template = self.templates.get(template_id)
        if template is None:
            logger.warning("Document template '%s' not found, using defaults", template_id)
            template = DocumentTemplate(resource_id=template_id)
        return template


def load_document_template(
    template_id: str = "service_plan",
    config_dir: Path | str | None = None,
) -> DocumentTemplate:
    """Convenience function to load all configuration and return one template."""
    loader = ConfigLoader(config_dir)
    loader.load_all()
    return loader.get_document_template(template_id)
