import io
import unittest

from svalloc.allocate import GreedyVariantAllocationCache, allocate_evidence
from svalloc.annotate import EvidenceDump, SequentialEvidenceAnnotator, allocate_to_high_breakend
from svalloc.breakpoint import BreakendSummary, BreakpointSummary
from svalloc.call import BreakpointCall
from svalloc.constants import EVIDENCE_TYPE
from svalloc.evidence import DiscordantReadPair, RealignedSoftClipEvidence, RemoteEvidence, SoftClipEvidence

from ..util import build_linear, build_read, build_read_pair


def soft_clip(name='read1', reference_start=100):
    read = build_read(query_name=name, query_sequence='ACGTACGTAC' + 'GGGGG', reference_start=reference_start, cigar='10M5S')
    return SoftClipEvidence.create('f', read)


class TestAnnotateAndAllocate(unittest.TestCase):

    def setUp(self):
        self.linear = build_linear()
        self.calls = [
            BreakpointCall('c2', BreakendSummary('1', 'f', 105, 112), qual=20, event_id='ev2'),
            BreakpointCall('c1', BreakendSummary('1', 'f', 109), qual=10, event_id='ev1'),
        ]

    def test_assign_to_all_then_allocate(self):
        evidence = [soft_clip()]
        annotator = SequentialEvidenceAnnotator(
            self.linear, self.calls, evidence, assign_evidence_to_single_breakpoint=False)
        annotated = list(annotator)
        self.assertEqual(['c2', 'c1'], [c.id for c in annotated])
        self.assertEqual([1, 1], [c.data['total_support'] for c in annotated])

        allocated = allocate_evidence(annotated)
        self.assertEqual(['c2', 'c1'], [c.id for c in allocated])
        self.assertEqual(['fread1'], allocated[0].evidence_ids())
        self.assertEqual([], allocated[1].evidence_ids())
        self.assertEqual(1, allocated[0].data['support'][EVIDENCE_TYPE.SOFT_CLIP])
        self.assertEqual(60, allocated[0].data['evidence_score'])

    def test_single_breakpoint_assignment(self):
        annotated = list(SequentialEvidenceAnnotator(self.linear, self.calls, [soft_clip()]))
        self.assertEqual([1, 0], [c.data['total_support'] for c in annotated])

    def test_dump(self):
        stream = io.StringIO()
        dump = EvidenceDump(stream)
        evidence = [soft_clip(), soft_clip('read2', reference_start=50000)]
        annotated = list(SequentialEvidenceAnnotator(self.linear, self.calls, evidence, dump=dump, sanity_check=True))
        dump.close()
        self.assertEqual(2, len(annotated))
        lines = stream.getvalue().strip().split('\n')
        self.assertTrue(lines[0].startswith('#evidence_id'))
        self.assertEqual(3, len(lines))
        self.assertEqual(2, dump.rows_written)

    def test_evidence_beyond_last_call_without_sanity_check(self):
        evidence = [soft_clip(), soft_clip('read2', reference_start=50000)]
        annotator = SequentialEvidenceAnnotator(self.linear, self.calls, evidence)
        list(annotator)
        self.assertEqual(0, annotator.unsupported_count)
        self.assertTrue(annotator.evidence_iter.has_next())

    def test_multimapping_read_allocated_to_best_call(self):
        calls = [
            BreakpointCall('c1', BreakendSummary('1', 'f', 109), qual=10, event_id='ev1'),
            BreakpointCall('c3', BreakendSummary('1', 'f', 5009), qual=30, event_id='ev3'),
        ]
        evidence = [soft_clip('multi'), soft_clip('multi', reference_start=5000)]
        annotated = list(SequentialEvidenceAnnotator(self.linear, calls, evidence))
        self.assertEqual([1, 1], [c.data['total_support'] for c in annotated])

        cache = GreedyVariantAllocationCache(unique_evidence_allocation=False)
        allocated = allocate_evidence(annotated, cache=cache)
        self.assertEqual([0, 1], [c.data['total_support'] for c in allocated])

    def test_multimapping_read_without_read_constraint(self):
        calls = [
            BreakpointCall('c1', BreakendSummary('1', 'f', 109), qual=10, event_id='ev1'),
            BreakpointCall('c3', BreakendSummary('1', 'f', 5009), qual=30, event_id='ev3'),
        ]
        evidence = [soft_clip('multi'), soft_clip('multi', reference_start=5000)]
        annotated = list(SequentialEvidenceAnnotator(self.linear, calls, evidence))
        cache = GreedyVariantAllocationCache(unique_read_alignment=False, unique_evidence_allocation=False)
        allocated = allocate_evidence(annotated, cache=cache)
        self.assertEqual([1, 1], [c.data['total_support'] for c in allocated])


class TestMateSplit(unittest.TestCase):

    def realigned_soft_clip(self):
        read = build_read(query_sequence='ACGTACGTAC' + 'GGGGG', reference_start=100, cigar='10M5S')
        realigned = build_read(reference_start=111, cigar='5M', is_reverse=True)
        return SoftClipEvidence.create('f', read, realigned)

    def test_read_pair_reads_split(self):
        read1, read2 = build_read_pair(
            build_read(query_name='pair1', reference_start=100),
            build_read(reference_name='2', reference_start=1000, is_reverse=True))
        first = DiscordantReadPair(read1, read2)
        second = DiscordantReadPair(read2, read1)
        self.assertNotEqual(allocate_to_high_breakend(first), allocate_to_high_breakend(second))

    def test_local_and_remote_split(self):
        evidence = self.realigned_soft_clip()
        self.assertIsInstance(evidence, RealignedSoftClipEvidence)
        self.assertNotEqual(allocate_to_high_breakend(evidence), allocate_to_high_breakend(RemoteEvidence(evidence)))

    def test_local_and_remote_assigned_to_different_mates(self):
        local = self.realigned_soft_clip()
        self.assertEqual(BreakendSummary('1', 'f', 115), local.location.remote)
        remote = RemoteEvidence(local)
        calls = [
            BreakpointCall(
                'a', BreakpointSummary(BreakendSummary('1', 'f', 109), BreakendSummary('1', 'f', 115)),
                qual=10, mate_id='b', event_id='ev'),
            BreakpointCall(
                'b', BreakpointSummary(BreakendSummary('1', 'f', 115), BreakendSummary('1', 'f', 109)),
                qual=10, mate_id='a', event_id='ev'),
        ]
        annotated = list(SequentialEvidenceAnnotator(build_linear(), calls, [local, remote]))
        self.assertEqual(['a', 'b'], [c.id for c in annotated])
        self.assertEqual([1, 1], [c.data['total_support'] for c in annotated])
        self.assertEqual(
            {local.evidence_id(), remote.evidence_id()},
            set(annotated[0].evidence_ids() + annotated[1].evidence_ids())
        )
