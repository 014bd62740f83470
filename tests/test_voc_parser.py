import os
import tempfile
import unittest
from pathlib import Path

from vocmeta.core import VocMeta
from vocmeta.exceptions import FormatMismatchError, MetadataReadError, UnsupportedFormatError
from vocmeta.format_detector import FormatDetector
from vocmeta.metadata_utils import (
    batch_read_metadata,
    filter_metadata_by_groups,
    get_metadata_summary,
    has_metadata,
)
from vocmeta.voc_parser import VOCParser

from voc_fixtures import block, extended, sound_data, stereo_data, voc_file


SAMPLE_VOC = voc_file(
    sound_data(0xA6, 0, samples=b'\x80' * 1000),
    block(3, b'\x10\x00\x83'),
    block(200, b'??'),
)


class TestVOCParser(unittest.TestCase):
    def test_requires_input(self) -> None:
        with self.assertRaises(ValueError):
            VOCParser()

    def test_tags(self) -> None:
        metadata = VOCParser(file_data=SAMPLE_VOC).parse()

        self.assertEqual(metadata['File:FileType'], 'VOC')
        self.assertEqual(metadata['File:MIMEType'], 'audio/x-voc')
        self.assertEqual(metadata['VOC:Version'], '1.10')
        self.assertEqual(metadata['VOC:DataBlockOffset'], 0x1A)
        self.assertEqual(metadata['VOC:BlockCount'], 4)
        self.assertEqual(metadata['VOC:BlockTypes'], {0: 1, 1: 1, 3: 1, 200: 1})
        self.assertTrue(metadata['VOC:Terminated'])
        self.assertEqual(metadata['VOC:DataOffset'], 32)
        self.assertEqual(metadata['VOC:CompressedBitsPerSample'], 8)
        self.assertEqual(metadata['VOC:Compression'], '8-bit')
        self.assertEqual(metadata['Audio:SampleRate'], 11111)
        self.assertEqual(metadata['Audio:NumChannels'], 1)
        self.assertEqual(metadata['Audio:BitsPerSample'], 8)
        self.assertEqual(metadata['Audio:DataFormat'], 'voc')
        self.assertEqual(metadata['Audio:BitrateMode'], 'cbr')
        self.assertTrue(metadata['Audio:Lossless'])
        self.assertIn('Audio:PlaytimeSeconds', metadata)
        self.assertTrue(metadata['Audio:Duration'].endswith(' s'))
        self.assertEqual(len(metadata['VOC:Warning']), 1)

    def test_block_tags(self) -> None:
        data = voc_file(sound_data(0xA6, 1), extended(65536 - 32, 0, 1), stereo_data(8000, 8, 1, 0x0006))
        metadata = VOCParser(file_data=data).parse()

        self.assertEqual(metadata['VOC:Block0:Offset'], 26)
        self.assertEqual(metadata['VOC:Block0:TypeName'], 'Sound Data')
        self.assertEqual(metadata['VOC:Block0:Compression'], '4-bit')
        self.assertEqual(metadata['VOC:Block1:TimeConstant'], 65504)
        self.assertTrue(metadata['VOC:Block1:Stereo'])
        self.assertEqual(metadata['VOC:Block2:FormatCode'], '0x0006')
        self.assertEqual(metadata['VOC:Block2:Compression'], 'CCITT a-Law')
        self.assertEqual(metadata['VOC:Compression'], 'CCITT a-Law')
        self.assertEqual(metadata['Audio:SampleRate'], 8000)
        self.assertNotIn('VOC:Warning', metadata)

    def test_without_block_tags(self) -> None:
        metadata = VOCParser(file_data=SAMPLE_VOC, include_blocks=False).parse()
        self.assertFalse(any(tag.startswith('VOC:Block0') for tag in metadata))

    def test_no_playtime_tags(self) -> None:
        metadata = VOCParser(file_data=voc_file(extended(65536 - 32, 0, 1))).parse()
        self.assertNotIn('Audio:PlaytimeSeconds', metadata)
        self.assertNotIn('Audio:Bitrate', metadata)
        self.assertNotIn('VOC:CompressedBitsPerSample', metadata)

    def test_format_mismatch_propagates(self) -> None:
        with self.assertRaises(FormatMismatchError):
            VOCParser(file_data=b'\x00' * 64).parse()

    def test_file_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, 'sample.voc')
            with open(path, 'wb') as f:
                f.write(SAMPLE_VOC)
            parser = VOCParser(file_path=path)
            metadata = parser.parse()
            self.assertEqual(metadata['Audio:SampleRate'], 11111)
            self.assertEqual(parser.result.avdataend, len(SAMPLE_VOC))


class TestVocMeta(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.voc_path = Path(self.tmpdir.name) / 'sample.voc'
        self.voc_path.write_bytes(SAMPLE_VOC)
        self.bad_path = Path(self.tmpdir.name) / 'bad.voc'
        self.bad_path.write_bytes(b'RIFF' + b'\x00' * 60)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_read(self) -> None:
        with VocMeta(self.voc_path) as voc:
            self.assertEqual(voc.get_tag('Audio:SampleRate'), 11111)
            self.assertEqual(voc.get_tag('Missing:Tag', 'n/a'), 'n/a')
            self.assertEqual(
                voc.get_tags(['VOC:Version', 'Audio:NumChannels']),
                {'VOC:Version': '1.10', 'Audio:NumChannels': 1},
            )
            result = voc.get_decode_result()
            self.assertEqual(len(result.blocks), 1)

    def test_groups(self) -> None:
        with VocMeta(self.voc_path) as voc:
            audio = voc.get_tags_by_group('audio')
            self.assertTrue(audio)
            self.assertTrue(all(tag.startswith('Audio:') for tag in audio))

    def test_options(self) -> None:
        with VocMeta(self.voc_path, options={'NoWarning': 'true', 'PrintConv': True}) as voc:
            metadata = voc.get_all_metadata()
            self.assertNotIn('VOC:Warning', metadata)
            self.assertEqual(metadata['Audio:SampleRate'], '11111 Hz')
            self.assertEqual(voc.get_all_metadata(format_values=False)['Audio:SampleRate'], 11111)

    def test_option_coercion(self) -> None:
        with VocMeta(self.voc_path, options={'IncludeBlocks': 'off', 'PrintConv': 1}) as voc:
            self.assertIs(voc.get_option('IncludeBlocks'), False)
            self.assertIs(voc.get_option('PrintConv'), True)
            self.assertNotIn('VOC:Block0:Offset', voc.get_all_metadata())

    def test_unknown_option(self) -> None:
        with VocMeta(self.voc_path) as voc:
            with self.assertRaises(ValueError):
                voc.set_option('FastScan', True)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            VocMeta(Path(self.tmpdir.name) / 'missing.voc')

    def test_unsupported_extension(self) -> None:
        wav_path = Path(self.tmpdir.name) / 'sample.wav'
        wav_path.write_bytes(SAMPLE_VOC)
        with self.assertRaises(UnsupportedFormatError):
            VocMeta(wav_path)

    def test_bad_signature(self) -> None:
        with self.assertRaises(FormatMismatchError):
            VocMeta(self.bad_path)

    def test_ignore_minor_errors(self) -> None:
        with VocMeta(self.bad_path, ignore_minor_errors=True) as voc:
            self.assertIn('VOC:Error', voc.get_all_metadata())
            self.assertIsNone(voc.get_decode_result())

    def test_avdata_range(self) -> None:
        embedded = Path(self.tmpdir.name) / 'embedded.voc'
        embedded.write_bytes(b'\x00' * 16 + SAMPLE_VOC + b'\xff' * 100)
        with VocMeta(embedded, avdataoffset=16, avdataend=16 + len(SAMPLE_VOC)) as voc:
            self.assertEqual(voc.get_tag('VOC:DataOffset'), 16 + 32)
            self.assertEqual(voc.get_decode_result().avdataend, 16 + len(SAMPLE_VOC))


class TestMetadataUtils(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.good = Path(self.tmpdir.name) / 'good.voc'
        self.good.write_bytes(SAMPLE_VOC)
        self.bad = Path(self.tmpdir.name) / 'bad.voc'
        self.bad.write_bytes(b'not a voice file at all')

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_has_metadata(self) -> None:
        self.assertTrue(has_metadata(self.good))
        self.assertFalse(has_metadata(self.bad))
        self.assertFalse(has_metadata(Path(self.tmpdir.name) / 'none.voc'))

    def test_batch_read(self) -> None:
        results = batch_read_metadata([self.good, self.bad])
        self.assertEqual(results[self.good]['Audio:SampleRate'], 11111)
        self.assertIn('_error', results[self.bad])

    def test_batch_read_tags_and_skip(self) -> None:
        errors = []
        results = batch_read_metadata(
            [self.good, self.bad],
            tags=['VOC:Version'],
            error_handler=lambda path, exc: errors.append(path),
            skip_no_metadata=True,
        )
        self.assertEqual(results, {self.good: {'VOC:Version': '1.10'}})
        self.assertEqual(errors, [])

    def test_filter_by_groups(self) -> None:
        metadata = {
            'VOC:Version': '1.10',
            'VOC:Block0:Offset': 26,
            'VOC:Block1:Offset': 40,
            'Audio:SampleRate': 8000,
            'File:FileType': 'VOC',
        }
        self.assertEqual(filter_metadata_by_groups(metadata, ['audio']), {'Audio:SampleRate': 8000})
        self.assertEqual(filter_metadata_by_groups(metadata, ['VOC:Block1']), {'VOC:Block1:Offset': 40})
        self.assertEqual(len(filter_metadata_by_groups(metadata, ['VOC'])), 3)
        self.assertEqual(
            filter_metadata_by_groups(metadata, ['VOC:Block0', 'VOC:Block1'], include=False),
            {'VOC:Version': '1.10', 'Audio:SampleRate': 8000, 'File:FileType': 'VOC'},
        )

    def test_summary(self) -> None:
        metadata = VOCParser(file_data=SAMPLE_VOC).parse()
        summary = get_metadata_summary(metadata)

        self.assertEqual(summary['total_tags'], len(metadata))
        self.assertEqual(summary['block_count'], 4)
        self.assertEqual(
            summary['block_types'],
            {'Terminator': 1, 'Sound Data': 1, 'Silence': 1, 'Unknown (200)': 1},
        )
        self.assertEqual(summary['recorded_blocks'], 1)
        self.assertEqual(summary['warnings'], 1)
        self.assertTrue(summary['terminated'])
        self.assertEqual(list(summary['groups']), ['Audio', 'File', 'VOC'])
        self.assertNotIn('groups', get_metadata_summary(metadata, include_counts=False))


class TestFormatDetector(unittest.TestCase):
    def test_detect(self) -> None:
        self.assertEqual(FormatDetector.detect_format(file_data=SAMPLE_VOC[:32]), 'VOC')
        self.assertEqual(FormatDetector.detect_format(file_path='sound.VOC'), 'VOC')
        self.assertIsNone(FormatDetector.detect_format(file_path='sound.wav', file_data=b'RIFF'))
        self.assertTrue(FormatDetector.is_supported_format('voc'))
        self.assertFalse(FormatDetector.is_supported_format('WAV'))


if __name__ == "__main__":
    unittest.main()
