# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core VocMeta class

This module provides the main API for reading metadata from Creative
Voice Files. It opens the file, runs the VOC parser and exposes the
resulting tags.

Copyright 2025 DNAi inc.
"""

from typing import Dict, Any, Optional, Union, List
from pathlib import Path

from vocmeta.voc_parser import VOCParser
from vocmeta.models import DecodeResult
from vocmeta.exceptions import (
    MetadataReadError,
    UnsupportedFormatError,
)
from vocmeta.value_formatter import format_voc_value


class VocMeta:
    """
    Main class for reading metadata from VOC files.

    Example:
        >>> with VocMeta('sound.voc') as voc:
        ...     metadata = voc.get_all_metadata()
        ...     rate = voc.get_tag('Audio:SampleRate')
    """

    # Supported file formats
    SUPPORTED_FORMATS = {'.voc'}

    def __init__(
        self,
        file_path: Union[str, Path],
        avdataoffset: int = 0,
        avdataend: Optional[int] = None,
        ignore_minor_errors: bool = False,
        options: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize VocMeta with a VOC file.

        Args:
            file_path: Path to the VOC file
            avdataoffset: Offset of the VOC header within the file (default: 0)
            avdataend: End of the audio data region (default: end of file)
            ignore_minor_errors: If True, a file that fails to parse yields
                an empty tag set with the error recorded in VOC:Error
            options: Initial API options (see available_options())

        Raises:
            FileNotFoundError: If the file does not exist
            UnsupportedFormatError: If the file format is not supported
            FormatMismatchError: If the file does not start with a VOC header
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        file_ext = self.file_path.suffix.lower()
        if file_ext not in self.SUPPORTED_FORMATS:
            raise UnsupportedFormatError(
                f"Unsupported file format: {self.file_path.suffix}. "
                f"Supported formats: {', '.join(sorted(self.SUPPORTED_FORMATS))}"
            )

        self.avdataoffset = avdataoffset
        self.avdataend = avdataend
        self.ignore_minor_errors = ignore_minor_errors
        self.metadata: Dict[str, Any] = {}
        self.decode_result: Optional[DecodeResult] = None

        self.options: Dict[str, Any] = {}
        self._initialize_default_options()
        for option_name, value in (options or {}).items():
            self.set_option(option_name, value)

        self._load_metadata()

    def _initialize_default_options(self) -> None:
        available = self.available_options()
        for option_name, option_info in available.items():
            if 'default' in option_info:
                self.options[option_name] = option_info['default']

    @staticmethod
    def available_options() -> Dict[str, Dict[str, Any]]:
        """
        Return a dictionary of available API options.

        Returns:
            Dictionary mapping option names to their metadata:
            {
                'OptionName': {
                    'description': 'Description of the option',
                    'type': 'bool',
                    'default': default_value,
                },
                ...
            }
        """
        return {
            'NoWarning': {
                'description': 'Omit VOC:Warning tags from metadata output',
                'type': 'bool',
                'default': False,
            },
            'IncludeBlocks': {
                'description': 'Include per-block VOC:Block<N>:* tags',
                'type': 'bool',
                'default': True,
            },
            'PrintConv': {
                'description': 'Format values for display (sample rate, bitrate, flags)',
                'type': 'bool',
                'default': False,
            },
        }

    def set_option(self, option_name: str, value: Any) -> None:
        """
        Set an API option value.

        Args:
            option_name: Name of the option (e.g., 'NoWarning')
            value: Value to set for the option

        Raises:
            ValueError: If option name is not recognized
        """
        available = self.available_options()
        if option_name not in available:
            raise ValueError(f"Unknown option: {option_name}. Use available_options() to see valid options.")

        option_info = available[option_name]
        expected_type = option_info.get('type')
        if expected_type == 'bool' and not isinstance(value, bool):
            # Accept 'true'/'false' style strings from config and CLI
            if isinstance(value, str):
                value = value.lower() in ('true', '1', 'yes', 'on')
            else:
                value = bool(value)

        self.options[option_name] = value

    def get_option(self, option_name: str, default: Any = None) -> Any:
        return self.options.get(option_name, default)

    def _load_metadata(self) -> None:
        parser = VOCParser(
            file_path=str(self.file_path),
            avdataoffset=self.avdataoffset,
            avdataend=self.avdataend,
            include_blocks=self.get_option('IncludeBlocks', True),
        )
        try:
            self.metadata = parser.parse()
        except MetadataReadError as e:
            if not self.ignore_minor_errors:
                raise
            self.metadata = {'VOC:Error': str(e)}
        self.decode_result = parser.result

    def get_decode_result(self) -> Optional[DecodeResult]:
        """Structured decoder output, or None if decoding failed."""
        return self.decode_result

    def get_all_metadata(self, format_values: Optional[bool] = None) -> Dict[str, Any]:
        """
        Get all metadata from the file.

        Args:
            format_values: If True, format values for display; defaults to
                the PrintConv option

        Returns:
            Dictionary containing all metadata tags and values
        """
        if format_values is None:
            format_values = self.get_option('PrintConv', False)

        result = {}
        for tag_name, value in self.metadata.items():
            if tag_name == 'VOC:Warning' and self.get_option('NoWarning', False):
                continue
            result[tag_name] = format_voc_value(tag_name, value) if format_values else value
        return result

    def get_tag(self, tag_name: str, default: Any = None) -> Any:
        """
        Get a specific metadata tag value.

        Args:
            tag_name: Name of the tag (e.g., 'Audio:SampleRate')
            default: Default value if tag is not found

        Returns:
            Tag value or default if not found
        """
        return self.metadata.get(tag_name, default)

    def get_tags(self, tag_names: List[str]) -> Dict[str, Any]:
        """
        Get multiple metadata tags at once.

        Args:
            tag_names: List of tag names to retrieve

        Returns:
            Dictionary mapping tag names to their values
        """
        result = {}
        for tag_name in tag_names:
            result[tag_name] = self.get_tag(tag_name)
        return result

    def get_tags_by_group(self, group: str) -> Dict[str, Any]:
        """
        Get all tags from a specific metadata group.

        Args:
            group: Name of the metadata group (e.g., 'VOC', 'Audio', 'File')

        Returns:
            Dictionary mapping tag names to their values for the specified group

        Examples:
            >>> with VocMeta('sound.voc') as voc:
            ...     audio_tags = voc.get_tags_by_group('Audio')
        """
        group_upper = group.upper()
        return {
            tag_name: value
            for tag_name, value in self.get_all_metadata(format_values=False).items()
            if tag_name.split(':', 1)[0].upper() == group_upper
        }

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        # The file is closed once metadata has been loaded
        pass
