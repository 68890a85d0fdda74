"""
ContigWeaver v0.1.0

Configuration schema for ContigWeaver.

Defines all available configuration parameters with defaults and validation.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


VALID_INPUT_FORMATS = ['auto', 'fastq', 'fasta']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Assembly
    # ========================================================================
    'assembly': {
        'kmer_size': 31,  # Nodes are (k-1)-mers
        'check_invariants': False,  # Assert graph invariants after every purge
    },

    # ========================================================================
    # Input
    # ========================================================================
    'input': {
        'format': 'auto',  # 'auto', 'fastq', 'fasta'
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'directory': 'contigweaver_out',
        'line_width': 0,  # 0 = one line per contig
        'write_stats': True,  # assembly_stats.json next to the contigs

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        ConfigValidationError: the file does not hold a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                user_config = yaml.safe_load(f)

            if user_config is None:
                return config
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping at the top level"
                )

            # Deep merge user config into defaults
            config = deep_merge(config, user_config)

    return config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'debug', 'short_reads')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'debug':
        config['assembly']['check_invariants'] = True
        config['output']['logging']['level'] = 'DEBUG'
        config['output']['logging']['log_file'] = 'contigweaver.log'

    elif template == 'short_reads':
        config['assembly']['kmer_size'] = 21
        config['input']['format'] = 'fastq'
        config['output']['line_width'] = 80

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    # Sections must be mappings before their keys can be checked
    sections = {}
    for name in ('assembly', 'input', 'output'):
        section = config.get(name, {})
        if isinstance(section, dict):
            sections[name] = section
        else:
            errors.append(f"Invalid {name} section: {section!r} (must be a mapping)")

    if 'output' in sections:
        logging_config = sections['output'].get('logging', {})
        if isinstance(logging_config, dict):
            sections['logging'] = logging_config
        else:
            errors.append(f"Invalid output.logging section: {logging_config!r} (must be a mapping)")

    # Validate k-mer size
    if 'assembly' in sections:
        k = sections['assembly'].get('kmer_size')
        if not isinstance(k, int) or isinstance(k, bool) or k < 2:
            errors.append(f"Invalid assembly.kmer_size: {k!r} (must be an integer >= 2)")

    # Validate input format
    if 'input' in sections:
        fmt = sections['input'].get('format', 'auto')
        if fmt not in VALID_INPUT_FORMATS:
            errors.append(f"Invalid input.format: {fmt} (expected one of {', '.join(VALID_INPUT_FORMATS)})")

    # Validate line width
    if 'output' in sections:
        line_width = sections['output'].get('line_width', 0)
        if not isinstance(line_width, int) or line_width < 0:
            errors.append(f"Invalid output.line_width: {line_width!r} (must be >= 0)")

    # Validate logging level
    if 'logging' in sections:
        level = str(sections['logging'].get('level', 'INFO')).upper()
        if level not in VALID_LOG_LEVELS:
            errors.append(f"Invalid output.logging.level: {level}")

    return errors

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
