"""Shared pytest fixtures: literal GC logs of every supported collector and format."""

from __future__ import annotations

import pytest
import structlog

from gclog_analyzer.model import GCModel
from gclog_analyzer.parser import get_parser


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test made (e.g. via the CLI) so later
    tests don't log to a stream captured by a finished CliRunner."""
    yield
    structlog.reset_defaults()

_JDK11_G1_LOG = """\
[0.015s][info][gc,heap] Heap region size: 1M
[0.017s][info][gc     ] Using G1
[0.017s][info][gc,heap,coops] Heap address: 0x00000007fc000000, size: 64 MB, Compressed Oops mode: Zero based, Oop shift amount: 3
[0.050s][info   ][gc           ] Periodic GC enabled with interval 100 ms[1.000s][info][safepoint     ] Application time: 0.0816788 seconds
[1.000s][info][safepoint     ] Entering safepoint region: G1CollectForAllocation
[1.000s][info][gc,start     ] GC(0) Pause Young (Normal) (Metadata GC Threshold)
[1.000s][info][gc,task      ] GC(0) Using 8 workers of 8 for evacuation
[1.010s][info][gc           ] GC(0) To-space exhausted
[1.010s][info][gc,phases    ] GC(0)   Pre Evacuate Collection Set: 0.0ms
[1.010s][info][gc,phases    ] GC(0)   Evacuate Collection Set: 9.5ms
[1.010s][info][gc,phases    ] GC(0)   Post Evacuate Collection Set: 0.6ms
[1.010s][info][gc,phases    ] GC(0)   Other: 0.5ms
[1.010s][info][gc,heap      ] GC(0) Eden regions: 19->0(33)
[1.010s][info][gc,heap      ] GC(0) Survivor regions: 0->3(3)
[1.010s][info][gc,heap      ] GC(0) Old regions: 0->2
[1.010s][info][gc,heap      ] GC(0) Humongous regions: 4->3
[1.010s][info][gc,metaspace ] GC(0) Metaspace: 20679K->20679K(45056K)
[1.010s][info][gc           ] GC(0) Pause Young (Concurrent Start) (Metadata GC Threshold) 19M->4M(64M) 10.709ms
[1.010s][info][gc,cpu       ] GC(0) User=0.02s Sys=0.01s Real=0.01s
[1.010s][info][safepoint     ] Leaving safepoint region
[1.010s][info][safepoint     ] Total time for which application threads were stopped: 0.0101229 seconds, Stopping threads took: 0.0000077 seconds
[3.000s][info][gc           ] GC(1) Concurrent Cycle
[3.000s][info][gc,marking   ] GC(1) Concurrent Clear Claimed Marks
[3.000s][info][gc,marking   ] GC(1) Concurrent Clear Claimed Marks 0.057ms
[3.000s][info][gc,marking   ] GC(1) Concurrent Scan Root Regions
[3.002s][info][gc,marking   ] GC(1) Concurrent Scan Root Regions 2.709ms
[3.002s][info][gc,marking   ] GC(1) Concurrent Mark (3.002s)
[3.002s][info][gc,marking   ] GC(1) Concurrent Mark From Roots
[3.002s][info][gc,task      ] GC(1) Using 2 workers of 2 for marking
[3.005s][info][gc,marking   ] GC(1) Concurrent Mark From Roots 3.109ms
[3.005s][info][gc,marking   ] GC(1) Concurrent Preclean
[3.005s][info][gc,marking   ] GC(1) Concurrent Preclean 0.040ms
[3.005s][info][gc,marking   ] GC(1) Concurrent Mark (2.391s, 2.394s) 3.251ms
[3.005s][info][gc,start     ] GC(1) Pause Remark
[3.005s][info][gc,stringtable] GC(1) Cleaned string and symbol table, strings: 9850 processed, 0 removed, symbols: 69396 processed, 29 removed
[3.008s][info][gc            ] GC(1) Pause Remark 5M->5M(64M) 2.381ms
[3.008s][info][gc,cpu        ] GC(1) User=0.01s Sys=0.00s Real=0.01s
[3.008s][info][gc,marking    ] GC(1) Concurrent Rebuild Remembered Sets
[3.010s][info][gc,marking    ] GC(1) Concurrent Rebuild Remembered Sets 2.151ms
[3.010s][info][gc,start      ] GC(1) Pause Cleanup
[3.010s][info][gc            ] GC(1) Pause Cleanup 6M->6M(64M) 0.094ms
[3.010s][info][gc,cpu        ] GC(1) User=0.00s Sys=0.00s Real=0.00s
[3.010s][info][gc,marking    ] GC(1) Concurrent Cleanup for Next Mark
[3.012s][info][gc,marking    ] GC(1) Concurrent Cleanup for Next Mark 2.860ms
[3.012s][info][gc            ] GC(1) Concurrent Cycle 14.256ms
[7.055s][info   ][gc,task       ] GC(2) Using 8 workers of 8 for full compaction
[7.055s][info   ][gc,start      ] GC(2) Pause Full (G1 Evacuation Pause)
[7.056s][info   ][gc,phases,start] GC(2) Phase 1: Mark live objects
[7.058s][info   ][gc,stringtable ] GC(2) Cleaned string and symbol table, strings: 1393 processed, 0 removed, symbols: 17391 processed, 0 removed
[7.058s][info   ][gc,phases      ] GC(2) Phase 1: Mark live objects 2.650ms
[7.058s][info   ][gc,phases,start] GC(2) Phase 2: Prepare for compaction
[7.061s][info   ][gc,phases      ] GC(2) Phase 2: Prepare for compaction 2.890ms
[7.061s][info   ][gc,phases,start] GC(2) Phase 3: Adjust pointers
[7.065s][info   ][gc,phases      ] GC(2) Phase 3: Adjust pointers 3.890ms
[7.065s][info   ][gc,phases,start] GC(2) Phase 4: Compact heap
[7.123s][info   ][gc,phases      ] GC(2) Phase 4: Compact heap 57.656ms
[7.123s][info   ][gc,heap        ] GC(2) Eden regions: 0->0(680)
[7.123s][info   ][gc,heap        ] GC(2) Survivor regions: 0->0(85)
[7.123s][info   ][gc,heap        ] GC(2) Old regions: 1700->1089
[7.123s][info   ][gc,heap        ] GC(2) Humongous regions: 0->0
[7.123s][info   ][gc,metaspace   ] GC(2) Metaspace: 3604K->3604K(262144K)
[7.123s][info   ][gc             ] GC(2) Pause Full (G1 Evacuation Pause) 1700M->1078M(1700M) 67.806ms
[7.123s][info   ][gc,cpu         ] GC(2) User=0.33s Sys=0.00s Real=0.07s"""

_JDK11_G1_REGION_LOG = """\
[3.865s][info][gc,start      ] GC(14) Pause Young (Normal) (G1 Evacuation Pause)
[3.865s][info][gc,task       ] GC(14) Using 2 workers of 2 for evacuation
[3.982s][info][gc,phases     ] GC(14)   Pre Evacuate Collection Set: 0.0ms
[3.982s][info][gc,phases     ] GC(14)   Evacuate Collection Set: 116.2ms
[3.982s][info][gc,phases     ] GC(14)   Post Evacuate Collection Set: 0.3ms
[3.982s][info][gc,phases     ] GC(14)   Other: 0.2ms
[3.982s][info][gc,heap       ] GC(14) Eden regions: 5->0(5)
[3.982s][info][gc,heap       ] GC(14) Survivor regions: 1->1(1)
[3.982s][info][gc,heap       ] GC(14) Old regions: 32->37
[3.982s][info][gc,heap       ] GC(14) Humongous regions: 2->2
[3.982s][info][gc,metaspace  ] GC(14) Metaspace: 21709K->21707K(1069056K)
[3.982s][info][gc            ] GC(14) Pause Young (Normal) (G1 Evacuation Pause) 637M->630M(2048M) 116.771ms"""

_JDK11_ZGC_LOG = """\
[7.000s] GC(374) Garbage Collection (Proactive)
[7.006s] GC(374) Pause Mark Start 4.459ms
[7.312s] GC(374) Concurrent Mark 306.720ms
[7.312s] GC(374) Pause Mark End 0.606ms
[7.313s] GC(374) Concurrent Process Non-Strong References 1.290ms
[7.314s] GC(374) Concurrent Reset Relocation Set 0.550ms
[7.314s] GC(374) Concurrent Destroy Detached Pages 0.001ms
[7.316s] GC(374) Concurrent Select Relocation Set 2.418ms
[7.321s] GC(374) Concurrent Prepare Relocation Set 5.719ms
[7.324s] GC(374) Pause Relocate Start 3.791ms
[7.356s] GC(374) Concurrent Relocate 32.974ms
[7.356s] GC(374) Load: 1.68/1.99/2.04
[7.356s] GC(374) MMU: 2ms/0.0%, 5ms/0.0%, 10ms/0.0%, 20ms/0.0%, 50ms/0.0%, 100ms/0.0%
[7.356s] GC(374) Mark: 8 stripe(s), 2 proactive flush(es), 1 terminate flush(es), 0 completion(s), 0 continuation(s)
[7.356s] GC(374) Relocation: Successful, 359M relocated
[7.356s] GC(374) NMethods: 21844 registered, 609 unregistered
[7.356s] GC(374) Metaspace: 125M used, 127M capacity, 128M committed, 130M reserved
[7.356s] GC(374) Soft: 18634 encountered, 0 discovered, 0 enqueued
[7.356s] GC(374) Weak: 56186 encountered, 18454 discovered, 3112 enqueued
[7.356s] GC(374) Final: 64 encountered, 16 discovered, 7 enqueued
[7.356s] GC(374) Phantom: 1882 encountered, 1585 discovered, 183 enqueued
[7.356s] GC(374)                Mark Start          Mark End        Relocate Start      Relocate End           High               Low
[7.356s] GC(374)  Capacity:    40960M (100%)      40960M (100%)      40960M (100%)      40960M (100%)      40960M (100%)      40960M (100%)
[7.356s] GC(374)   Reserve:       96M (0%)           96M (0%)           96M (0%)           96M (0%)           96M (0%)           96M (0%)
[7.356s] GC(374)      Free:    35250M (86%)       35210M (86%)       35964M (88%)       39410M (96%)       39410M (96%)       35210M (86%)
[7.356s] GC(374)      Used:     5614M (14%)        5654M (14%)        4900M (12%)        1454M (4%)         5654M (14%)        1454M (4%)
[7.356s] GC(374)      Live:         -              1173M (3%)         1173M (3%)         1173M (3%)             -                  -
[7.356s] GC(374) Allocated:         -                40M (0%)           40M (0%)          202M (0%)             -                  -
[7.356s] GC(374)   Garbage:         -              4440M (11%)        3686M (9%)          240M (1%)             -                  -
[7.356s] GC(374) Reclaimed:         -                  -               754M (2%)         4200M (10%)            -                  -
[7.356s] GC(374) Garbage Collection (Proactive) 5614M(14%)->1454M(4%)
[7.555s] === Garbage Collection Statistics =======================================================================================================================
[7.555s]                                                              Last 10s              Last 10m              Last 10h                Total
[7.555s]                                                              Avg / Max             Avg / Max             Avg / Max             Avg / Max
[7.555s]   Collector: Garbage Collection Cycle                    362.677 / 362.677     365.056 / 529.211     315.229 / 868.961     315.229 / 868.961     ms
[7.555s]  Contention: Mark Segment Reset Contention                     0 / 0                 1 / 106               0 / 238               0 / 238         ops/s
[7.555s]  Contention: Mark SeqNum Reset Contention                      0 / 0                 0 / 1                 0 / 1                 0 / 1           ops/s
[7.555s]  Contention: Relocation Contention                             1 / 10                0 / 52                0 / 87                0 / 87          ops/s
[7.555s]    Critical: Allocation Stall                              0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Critical: Allocation Stall                                  0 / 0                 0 / 0                 0 / 0                 0 / 0           ops/s
[7.555s]    Critical: GC Locker Stall                               0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Critical: GC Locker Stall                                   0 / 0                 0 / 0                 0 / 0                 0 / 0           ops/s
[7.555s]      Memory: Allocation Rate                                  85 / 210             104 / 826              54 / 2628             54 / 2628        MB/s
[7.555s]      Memory: Heap Used After Mark                           5654 / 5654           5727 / 6416           5588 / 14558          5588 / 14558       MB
[7.555s]      Memory: Heap Used After Relocation                     1454 / 1454           1421 / 1814           1224 / 2202           1224 / 2202        MB
[7.555s]      Memory: Heap Used Before Mark                          5614 / 5614           5608 / 6206           5503 / 14268          5503 / 14268       MB
[7.555s]      Memory: Heap Used Before Relocation                    4900 / 4900           4755 / 5516           4665 / 11700          4665 / 11700       MB
[7.555s]      Memory: Out Of Memory                                     0 / 0                 0 / 0                 0 / 0                 0 / 0           ops/s
[7.555s]      Memory: Page Cache Flush                                  0 / 0                 0 / 0                 0 / 0                 0 / 0           MB/s
[7.555s]      Memory: Page Cache Hit L1                                49 / 105              53 / 439              27 / 1353             27 / 1353        ops/s
[7.555s]      Memory: Page Cache Hit L2                                 0 / 0                 0 / 0                 0 / 0                 0 / 0           ops/s
[7.555s]      Memory: Page Cache Miss                                   0 / 0                 0 / 0                 0 / 551               0 / 551         ops/s
[7.555s]      Memory: Undo Object Allocation Failed                     0 / 0                 0 / 0                 0 / 8                 0 / 8           ops/s
[7.555s]      Memory: Undo Object Allocation Succeeded                  1 / 10                0 / 52                0 / 87                0 / 87          ops/s
[7.555s]      Memory: Undo Page Allocation                              0 / 0                 0 / 1                 0 / 16                0 / 16          ops/s
[7.555s]       Phase: Concurrent Destroy Detached Pages             0.001 / 0.001         0.001 / 0.001         0.001 / 0.012         0.001 / 0.012       ms
[7.555s]       Phase: Concurrent Mark                             306.720 / 306.720     303.979 / 452.112     255.790 / 601.718     255.790 / 601.718     ms
[7.555s]       Phase: Concurrent Mark Continue                      0.000 / 0.000         0.000 / 0.000       189.372 / 272.607     189.372 / 272.607     ms
[7.555s]       Phase: Concurrent Prepare Relocation Set             5.719 / 5.719         6.314 / 14.492        6.150 / 36.507        6.150 / 36.507      ms
[7.555s]       Phase: Concurrent Process Non-Strong References      1.290 / 1.290         1.212 / 1.657         1.179 / 2.334         1.179 / 2.334       ms
[7.555s]       Phase: Concurrent Relocate                          32.974 / 32.974       35.964 / 86.278       31.599 / 101.253      31.599 / 101.253     ms
[7.555s]       Phase: Concurrent Reset Relocation Set               0.550 / 0.550         0.615 / 0.937         0.641 / 5.411         0.641 / 5.411       ms
[7.555s]       Phase: Concurrent Select Relocation Set              2.418 / 2.418         2.456 / 3.131         2.509 / 4.753         2.509 / 4.753       ms
[7.555s]       Phase: Pause Mark End                                0.606 / 0.606         0.612 / 0.765         0.660 / 5.543         0.660 / 5.543       ms
[7.555s]       Phase: Pause Mark Start                              4.459 / 4.459         4.636 / 6.500         6.160 / 547.572       6.160 / 547.572     ms
[7.555s]       Phase: Pause Relocate Start                          3.791 / 3.791         3.970 / 5.443         4.047 / 8.993         4.047 / 8.993       ms
[7.555s]    Subphase: Concurrent Mark                             306.253 / 306.593     303.509 / 452.030     254.759 / 601.564     254.759 / 601.564     ms
[7.555s]    Subphase: Concurrent Mark Idle                          1.069 / 1.110         1.527 / 18.317        1.101 / 18.317        1.101 / 18.317      ms
[7.555s]    Subphase: Concurrent Mark Try Flush                     0.554 / 0.685         0.872 / 18.247        0.507 / 18.247        0.507 / 18.247      ms
[7.555s]    Subphase: Concurrent Mark Try Terminate                 0.978 / 1.112         1.386 / 18.318        0.998 / 18.318        0.998 / 18.318      ms
[7.555s]    Subphase: Concurrent References Enqueue                 0.007 / 0.007         0.008 / 0.013         0.009 / 0.037         0.009 / 0.037       ms
[7.555s]    Subphase: Concurrent References Process                 0.628 / 0.628         0.638 / 1.153         0.596 / 1.789         0.596 / 1.789       ms
[7.555s]    Subphase: Concurrent Weak Roots                         0.497 / 0.618         0.492 / 0.670         0.502 / 1.001         0.502 / 1.001       ms
[7.555s]    Subphase: Concurrent Weak Roots JNIWeakHandles          0.001 / 0.001         0.001 / 0.006         0.001 / 0.007         0.001 / 0.007       ms
[7.555s]    Subphase: Concurrent Weak Roots StringTable             0.476 / 0.492         0.402 / 0.523         0.400 / 0.809         0.400 / 0.809       ms
[7.555s]    Subphase: Concurrent Weak Roots VMWeakHandles           0.105 / 0.123         0.098 / 0.150         0.103 / 0.903         0.103 / 0.903       ms
[7.555s]    Subphase: Pause Mark Try Complete                       0.000 / 0.000         0.001 / 0.004         0.156 / 1.063         0.156 / 1.063       ms
[7.555s]    Subphase: Pause Remap TLABS                             0.040 / 0.040         0.046 / 0.073         0.050 / 0.140         0.050 / 0.140       ms
[7.555s]    Subphase: Pause Retire TLABS                            0.722 / 0.722         0.835 / 1.689         0.754 / 1.919         0.754 / 1.919       ms
[7.555s]    Subphase: Pause Roots                                   1.581 / 2.896         1.563 / 3.787         1.592 / 545.902       1.592 / 545.902     ms
[7.555s]    Subphase: Pause Roots ClassLoaderDataGraph              1.461 / 2.857         1.549 / 3.782         1.554 / 6.380         1.554 / 6.380       ms
[7.555s]    Subphase: Pause Roots CodeCache                         1.130 / 1.312         0.999 / 1.556         0.988 / 6.322         0.988 / 6.322       ms
[7.555s]    Subphase: Pause Roots JNIHandles                        0.010 / 0.015         0.004 / 0.028         0.005 / 1.709         0.005 / 1.709       ms
[7.555s]    Subphase: Pause Roots JNIWeakHandles                    0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Roots JRFWeak                           0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Roots JVMTIExport                       0.001 / 0.001         0.001 / 0.003         0.001 / 0.005         0.001 / 0.005       ms
[7.555s]    Subphase: Pause Roots JVMTIWeakExport                   0.001 / 0.001         0.001 / 0.001         0.001 / 0.012         0.001 / 0.012       ms
[7.555s]    Subphase: Pause Roots Management                        0.002 / 0.002         0.003 / 0.006         0.003 / 0.305         0.003 / 0.305       ms
[7.555s]    Subphase: Pause Roots ObjectSynchronizer                0.000 / 0.000         0.000 / 0.001         0.000 / 0.006         0.000 / 0.006       ms
[7.555s]    Subphase: Pause Roots Setup                             0.474 / 0.732         0.582 / 1.791         0.526 / 2.610         0.526 / 2.610       ms
[7.555s]    Subphase: Pause Roots StringTable                       0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Roots SystemDictionary                  0.028 / 0.039         0.027 / 0.075         0.033 / 2.777         0.033 / 2.777       ms
[7.555s]    Subphase: Pause Roots Teardown                          0.003 / 0.005         0.003 / 0.009         0.003 / 0.035         0.003 / 0.035       ms
[7.555s]    Subphase: Pause Roots Threads                           0.262 / 1.237         0.309 / 1.791         0.358 / 544.610       0.358 / 544.610     ms
[7.555s]    Subphase: Pause Roots Universe                          0.003 / 0.004         0.003 / 0.009         0.003 / 0.047         0.003 / 0.047       ms
[7.555s]    Subphase: Pause Roots VMWeakHandles                     0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Weak Roots                              0.000 / 0.003         0.000 / 0.007         0.000 / 0.020         0.000 / 0.020       ms
[7.555s]    Subphase: Pause Weak Roots JFRWeak                      0.001 / 0.001         0.001 / 0.002         0.001 / 0.012         0.001 / 0.012       ms
[7.555s]    Subphase: Pause Weak Roots JNIWeakHandles               0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Weak Roots JVMTIWeakExport              0.001 / 0.001         0.001 / 0.001         0.001 / 0.008         0.001 / 0.008       ms
[7.555s]    Subphase: Pause Weak Roots Setup                        0.000 / 0.000         0.000 / 0.000         0.000 / 0.001         0.000 / 0.001       ms
[7.555s]    Subphase: Pause Weak Roots StringTable                  0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Weak Roots SymbolTable                  0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]    Subphase: Pause Weak Roots Teardown                     0.001 / 0.001         0.001 / 0.001         0.001 / 0.015         0.001 / 0.015       ms
[7.555s]    Subphase: Pause Weak Roots VMWeakHandles                0.000 / 0.000         0.000 / 0.000         0.000 / 0.000         0.000 / 0.000       ms
[7.555s]      System: Java Threads                                    911 / 911             910 / 911             901 / 913             901 / 913         threads
[7.555s] =========================================================================================================================================================
[7.777s] Allocation Stall (ThreadPoolTaskScheduler-1) 0.204ms
[7.888s] Allocation Stall (NioProcessor-2) 0.391ms
[7.889s] Out Of Memory (thread 8)"""

_JDK11_SERIAL_LOG = """\
[0.486s][info][gc,start     ] GC(0) Pause Young (Allocation Failure)
[0.511s][info][gc,heap      ] GC(0) DefNew: 69952K->8704K(78656K)
[0.511s][info][gc,heap      ] GC(0) Tenured: 0K->24185K(174784K)
[0.511s][info][gc,metaspace ] GC(0) Metaspace: 6529K->6519K(1056768K)
[0.511s][info][gc           ] GC(0) Pause Young (Allocation Failure) 68M->32M(247M) 25.164ms
[0.511s][info][gc,cpu       ] GC(0) User=0.02s Sys=0.00s Real=0.02s
[5.614s][info][gc,start     ] GC(1) Pause Full (Allocation Failure)
[5.614s][info][gc,phases,start] GC(1) Phase 1: Mark live objects
[5.662s][info][gc,phases      ] GC(1) Phase 1: Mark live objects 47.589ms
[5.662s][info][gc,phases,start] GC(1) Phase 2: Compute new object addresses
[5.688s][info][gc,phases      ] GC(1) Phase 2: Compute new object addresses 26.097ms
[5.688s][info][gc,phases,start] GC(1) Phase 3: Adjust pointers
[5.743s][info][gc,phases      ] GC(1) Phase 3: Adjust pointers 55.459ms
[5.743s][info][gc,phases,start] GC(1) Phase 4: Move objects
[5.760s][info][gc,phases      ] GC(1) Phase 4: Move objects 17.259ms
[5.761s][info][gc             ] GC(1) Pause Full (Allocation Failure) 215M->132M(247M) 146.617ms"""

_JDK11_PARALLEL_LOG = """\
[0.455s][info][gc,start     ] GC(0) Pause Young (Allocation Failure)
[0.466s][info][gc,heap      ] GC(0) PSYoungGen: 65536K->10720K(76288K)
[0.466s][info][gc,heap      ] GC(0) ParOldGen: 0K->20800K(175104K)
[0.466s][info][gc,metaspace ] GC(0) Metaspace: 6531K->6531K(1056768K)
[0.466s][info][gc           ] GC(0) Pause Young (Allocation Failure) 64M->30M(245M) 11.081ms
[0.466s][info][gc,cpu       ] GC(0) User=0.03s Sys=0.02s Real=0.01s
[2.836s][info][gc,start     ] GC(1) Pause Full (Ergonomics)
[2.836s][info][gc,phases,start] GC(1) Marking Phase
[2.857s][info][gc,phases      ] GC(1) Marking Phase 21.145ms
[2.857s][info][gc,phases,start] GC(1) Summary Phase
[2.857s][info][gc,phases      ] GC(1) Summary Phase 0.006ms
[2.857s][info][gc,phases,start] GC(1) Adjust Roots
[2.859s][info][gc,phases      ] GC(1) Adjust Roots 1.757ms
[2.859s][info][gc,phases,start] GC(1) Compaction Phase
[2.881s][info][gc,phases      ] GC(1) Compaction Phase 22.465ms
[2.881s][info][gc,phases,start] GC(1) Post Compact
[2.882s][info][gc,phases      ] GC(1) Post Compact 1.054ms
[2.882s][info][gc,heap        ] GC(1) PSYoungGen: 10729K->0K(76288K)
[2.882s][info][gc,heap        ] GC(1) ParOldGen: 141664K->94858K(175104K)
[2.882s][info][gc,metaspace   ] GC(1) Metaspace: 7459K->7459K(1056768K)
[2.882s][info][gc             ] GC(1) Pause Full (Ergonomics) 148M->92M(245M) 46.539ms
[2.882s][info][gc,cpu         ] GC(1) User=0.17s Sys=0.00s Real=0.05s"""

_JDK11_CMS_LOG = """\
[0.479s][info][gc,start     ] GC(0) Pause Young (Allocation Failure)
[0.480s][info][gc,task      ] GC(0) Using 5 workers of 8 for evacuation
[0.510s][info][gc,heap      ] GC(0) ParNew: 69952K->8703K(78656K)
[0.510s][info][gc,heap      ] GC(0) CMS: 0K->24072K(174784K)
[0.510s][info][gc,metaspace ] GC(0) Metaspace: 6531K->6530K(1056768K)
[0.510s][info][gc           ] GC(0) Pause Young (Allocation Failure) 68M->32M(247M) 31.208ms
[0.510s][info][gc,cpu       ] GC(0) User=0.06s Sys=0.03s Real=0.03s
[3.231s][info][gc,start     ] GC(1) Pause Initial Mark
[3.235s][info][gc           ] GC(1) Pause Initial Mark 147M->147M(247M) 3.236ms
[3.235s][info][gc,cpu       ] GC(1) User=0.01s Sys=0.02s Real=0.03s
[3.235s][info][gc           ] GC(1) Concurrent Mark
[3.235s][info][gc,task      ] GC(1) Using 2 workers of 2 for marking
[3.257s][info][gc           ] GC(1) Concurrent Mark 22.229ms
[3.257s][info][gc,cpu       ] GC(1) User=0.07s Sys=0.00s Real=0.03s
[3.257s][info][gc           ] GC(1) Concurrent Preclean
[3.257s][info][gc           ] GC(1) Concurrent Preclean 0.264ms
[3.257s][info][gc,cpu       ] GC(1) User=0.00s Sys=0.00s Real=0.00s
[3.257s][info][gc,start     ] GC(1) Pause Remark
[3.259s][info][gc           ] GC(1) Pause Remark 149M->149M(247M) 1.991ms
[3.259s][info][gc,cpu       ] GC(1) User=0.02s Sys=0.03s Real=0.01s
[3.259s][info][gc           ] GC(1) Concurrent Sweep
[3.279s][info][gc           ] GC(1) Concurrent Sweep 19.826ms
[3.279s][info][gc,cpu       ] GC(1) User=0.03s Sys=0.00s Real=0.02s
[3.279s][info][gc           ] GC(1) Concurrent Reset
[3.280s][info][gc           ] GC(1) Concurrent Reset 0.386ms
[3.280s][info][gc,cpu       ] GC(1) User=0.00s Sys=0.00s Real=0.00s
[3.280s][info][gc,heap      ] GC(1) Old: 142662K->92308K(174784K)
[8.970s][info][gc,start     ] GC(2) Pause Full (Allocation Failure)
[8.970s][info][gc,phases,start] GC(2) Phase 1: Mark live objects
[9.026s][info][gc,phases      ] GC(2) Phase 1: Mark live objects 55.761ms
[9.026s][info][gc,phases,start] GC(2) Phase 2: Compute new object addresses
[9.051s][info][gc,phases      ] GC(2) Phase 2: Compute new object addresses 24.761ms
[9.051s][info][gc,phases,start] GC(2) Phase 3: Adjust pointers
[9.121s][info][gc,phases      ] GC(2) Phase 3: Adjust pointers 69.678ms
[9.121s][info][gc,phases,start] GC(2) Phase 4: Move objects
[9.149s][info][gc,phases      ] GC(2) Phase 4: Move objects 28.069ms
[9.149s][info][gc             ] GC(2) Pause Full (Allocation Failure) 174M->166M(247M) 178.617ms
[9.149s][info][gc,cpu         ] GC(2) User=0.17s Sys=0.00s Real=0.18s"""

_JDK11_INTERLEAVE_LOG = """\
[5.643s][info][gc,start     ] GC(3) Pause Young (Allocation Failure)
[5.643s][info][gc,start     ] GC(4) Pause Full (Allocation Failure)
[5.643s][info][gc,phases,start] GC(4) Phase 1: Mark live objects
[5.691s][info][gc,phases      ] GC(4) Phase 1: Mark live objects 47.363ms
[5.691s][info][gc,phases,start] GC(4) Phase 2: Compute new object addresses
[5.715s][info][gc,phases      ] GC(4) Phase 2: Compute new object addresses 24.314ms
[5.715s][info][gc,phases,start] GC(4) Phase 3: Adjust pointers
[5.771s][info][gc,phases      ] GC(4) Phase 3: Adjust pointers 56.294ms
[5.771s][info][gc,phases,start] GC(4) Phase 4: Move objects
[5.789s][info][gc,phases      ] GC(4) Phase 4: Move objects 17.974ms
[5.789s][info][gc             ] GC(4) Pause Full (Allocation Failure) 215M->132M(247M) 146.153ms
[5.789s][info][gc,heap        ] GC(3) DefNew: 78655K->0K(78656K)
[5.789s][info][gc,heap        ] GC(3) Tenured: 142112K->135957K(174784K)
[5.789s][info][gc,metaspace   ] GC(3) Metaspace: 7462K->7462K(1056768K)
[5.789s][info][gc             ] GC(3) Pause Young (Allocation Failure) 215M->132M(247M) 146.211ms
[5.789s][info][gc,cpu         ] GC(3) User=0.15s Sys=0.00s Real=0.15s"""

_JDK8_CMS_LOG = """\
OpenJDK 64-Bit Server VM (25.212-b469) for linux-amd64 JRE (1.8.0_212-b469), built on Jun 16 2019 15:54:49 by "admin" with gcc 4.8.2
Memory: 4k page, physical 8388608k(5632076k free), swap 0k(0k free)
610.956: [Full GC (Heap Dump Initiated GC) 610.956: [CMS[YG occupancy: 1212954 K (1843200 K)]611.637: [weak refs processing, 0.0018945 secs]611.639: [class unloading, 0.0454119 secs]611.684: [scrub symbol table, 0.0248340 secs]611.709: [scrub string table, 0.0033967 secs]: 324459K->175339K(3072000K), 1.0268069 secs] 1537414K->1388294K(4915200K), [Metaspace: 114217K->113775K(1153024K)], 1.0277002 secs] [Times: user=1.71 sys=0.05, real=1.03 secs]
674.686: [GC (Allocation Failure) 674.687: [ParNew: 1922432K->174720K(1922432K), 0.1691241 secs] 3557775K->1858067K(4019584K), 0.1706065 secs] [Times: user=0.54 sys=0.04, real=0.17 secs]
675.110: Total time for which application threads were stopped: 0.0001215 seconds, Stopping threads took: 0.0000271 seconds
675.111: Application time: 0.0170944 seconds
675.164: [GC (CMS Initial Mark) [1 CMS-initial-mark: 1683347K(2097152K)] 1880341K(4019584K), 0.0714398 secs] [Times: user=0.19 sys=0.05, real=0.07 secs]675.461: [CMS-concurrent-mark-start]
705.287: [GC (Allocation Failure) 705.288: [ParNew: 1922432K->174720K(1922432K), 0.2481441 secs] 3680909K->2051729K(4019584K), 0.2502404 secs] [Times: user=0.93 sys=0.10, real=0.25 secs]
709.876: [CMS-concurrent-mark: 17.528/34.415 secs] [Times: user=154.39 sys=4.20, real=34.42 secs]
709.959: [CMS-concurrent-preclean-start]
710.570: [CMS-concurrent-preclean: 0.576/0.611 secs] [Times: user=3.08 sys=0.05, real=0.69 secs]
710.571: [CMS-concurrent-abortable-preclean-start]
715.691: [GC (Allocation Failure) 715.692: [ParNew: 1922432K->174720K(1922432K), 0.1974709 secs] 3799441K->2119132K(4019584K), 0.1992381 secs] [Times: user=0.61 sys=0.04, real=0.20 secs]
717.759: [CMS-concurrent-abortable-preclean: 5.948/7.094 secs] [Times: user=32.21 sys=0.66, real=7.19 secs]
717.792: [GC (CMS Final Remark) [YG occupancy: 438765 K (1922432 K)]717.792: [Rescan (parallel) , 0.1330457 secs]717.925: [weak refs processing, 0.0007103 secs]717.926: [class unloading, 0.2074917 secs]718.134: [scrub symbol table, 0.0751664 secs]718.209: [scrub string table, 0.0137015 secs][1 CMS-remark: 1944412K(2097152K)] 2383178K(4019584K), 0.4315000 secs] [Times: user=0.77 sys=0.01, real=0.43 secs]
718.226: [CMS-concurrent-sweep-start]
724.991: [GC (Allocation Failure) 724.992: [ParNew: 1922432K->174720K(1922432K), 0.2272846 secs] 3377417K->1710595K(4019584K), 0.2289948 secs] [Times: user=0.70 sys=0.01, real=0.23 secs]
728.865: [CMS-concurrent-sweep: 8.279/10.639 secs] [Times: user=48.12 sys=1.21, real=10.64 secs]
731.570: [CMS-concurrent-reset-start]
731.806: [CMS-concurrent-reset: 0.205/0.237 secs] [Times: user=1.43 sys=0.04, real=0.34 secs]
778.294: [GC (Allocation Failure) 778.295: [ParNew: 1922432K->163342K(1922432K), 0.2104952 secs] 3570857K->1917247K(4019584K), 0.2120639 secs] [Times: user=0.63 sys=0.00, real=0.21 secs]
778.534: [GC (CMS Initial Mark) [1 CMS-initial-mark: 1753905K(2097152K)] 1917298K(4019584K), 0.0645754 secs] [Times: user=0.20 sys=0.01, real=0.06 secs]
778.601: [CMS-concurrent-mark-start]
792.762: [CMS-concurrent-mark: 11.404/14.161 secs] [Times: user=61.30 sys=2.27, real=14.17 secs]
792.763: [CMS-concurrent-preclean-start]
795.862: [CMS-concurrent-preclean: 2.148/3.100 secs] [Times: user=12.43 sys=0.91, real=3.10 secs]
795.864: [CMS-concurrent-abortable-preclean-start]
795.864: [CMS-concurrent-abortable-preclean: 0.000/0.000 secs] [Times: user=0.03 sys=0.00, real=0.00 secs]
795.886: [GC (CMS Final Remark) [YG occupancy: 1619303 K (1922432 K)]795.887: [Rescan (parallel) , 0.2995817 secs]796.186: [weak refs processing, 0.0001985 secs]796.187: [class unloading, 0.1856105 secs]796.372: [scrub symbol table, 0.0734544 secs]796.446: [scrub string table, 0.0079670 secs][1 CMS-remark: 2048429K(2097152K)] 3667732K(4019584K), 0.5676600 secs] [Times: user=1.34 sys=0.01, real=0.57 secs]
796.456: [CMS-concurrent-sweep-start]
796.991: [GC (Allocation Failure) 796.992: [ParNew: 1922432K->1922432K(1922432K), 0.0000267 secs]796.992: [CMS797.832: [CMS-concurrent-sweep: 1.180/1.376 secs] [Times: user=3.42 sys=0.14, real=1.38 secs]
 (concurrent mode failure): 2034154K->1051300K(2097152K), 4.6146919 secs] 3956586K->1051300K(4019584K), [Metaspace: 296232K->296083K(1325056K)], 4.6165192 secs] [Times: user=4.60 sys=0.05, real=4.62 secs]
813.396: [GC (Allocation Failure) 813.396: [ParNew813.404: [SoftReference, 4 refs, 0.0000260 secs]813.405: [WeakReference, 59 refs, 0.0000110 secs]813.406: [FinalReference, 1407 refs, 0.0025979 secs]813.407: [PhantomReference, 11 refs, 10 refs, 0.0000131 secs]813.408: [JNI Weak Reference, 0.0000088 secs]: 69952K->8704K(78656K), 0.0104509 secs] 69952K->11354K(253440K), 0.0105137 secs] [Times: user=0.04 sys=0.01, real=0.01 secs]
"""

_JDK8_G1_LOG = """\
3.960: [GC pause (G1 Evacuation Pause) (young)4.000: [SoftReference, 0 refs, 0.0000435 secs]4.000: [WeakReference, 374 refs, 0.0002082 secs]4.001: [FinalReference, 5466 refs, 0.0141707 secs]4.015: [PhantomReference, 0 refs, 0 refs, 0.0000253 secs]4.015: [JNI Weak Reference, 0.0000057 secs], 0.0563085 secs]
   [Parallel Time: 39.7 ms, GC Workers: 4]
      [GC Worker Start (ms): Min: 3959.8, Avg: 3959.9, Max: 3960.1, Diff: 0.2]
      [Ext Root Scanning (ms): Min: 2.6, Avg: 10.1, Max: 17.9, Diff: 15.2, Sum: 40.4]
      [Update RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
         [Processed Buffers: Min: 0, Avg: 0.0, Max: 0, Diff: 0, Sum: 0]
      [Scan RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Code Root Scanning (ms): Min: 0.0, Avg: 0.5, Max: 2.1, Diff: 2.1, Sum: 2.1]
      [Object Copy (ms): Min: 18.1, Avg: 26.2, Max: 33.7, Diff: 15.6, Sum: 104.9]
      [Termination (ms): Min: 0.0, Avg: 1.5, Max: 3.5, Diff: 3.5, Sum: 6.2]
         [Termination Attempts: Min: 1, Avg: 21.8, Max: 51, Diff: 50, Sum: 87]
      [GC Worker Other (ms): Min: 0.0, Avg: 0.1, Max: 0.1, Diff: 0.0, Sum: 0.2]
      [GC Worker Total (ms): Min: 38.0, Avg: 38.5, Max: 39.5, Diff: 1.5, Sum: 153.8]
      [GC Worker End (ms): Min: 3998.0, Avg: 3998.4, Max: 3999.4, Diff: 1.4]
   [Code Root Fixup: 0.2 ms]
   [Code Root Purge: 0.2 ms]
   [Clear CT: 0.2 ms]
   [Other: 16.0 ms]
      [Choose CSet: 0.0 ms]
      [Ref Proc: 15.1 ms]
      [Ref Enq: 0.2 ms]
      [Redirty Cards: 0.1 ms]
      [Humongous Register: 0.0 ms]
      [Humongous Reclaim: 0.0 ms]
      [Free CSet: 0.3 ms]
   [Eden: 184.0M(184.0M)->0.0B(160.0M) Survivors: 0.0B->24.0M Heap: 184.0M(3800.0M)->19.3M(3800.0M)]
 [Times: user=0.07 sys=0.01, real=0.06 secs]
4.230: [GC concurrent-root-region-scan-start]
4.391: [GC concurrent-root-region-scan-end, 0.1608430 secs]
4.391: [GC concurrent-mark-start]
7.101: [GC concurrent-mark-reset-for-overflow]
19.072: [GC concurrent-mark-end, 14.6803750 secs]
19.078: [GC remark 19.078: [Finalize Marking, 0.1774665 secs] 19.255: [GC ref-proc, 0.1648116 secs] 19.420: [Unloading, 0.1221964 secs], 0.4785858 secs]
 [Times: user=1.47 sys=0.31, real=0.48 secs]
19.563: [GC cleanup 11G->9863M(20G), 0.0659638 secs]
 [Times: user=0.20 sys=0.01, real=0.07 secs]
19.630: [GC concurrent-cleanup-start]
19.631: [GC concurrent-cleanup-end, 0.0010377 secs]
23.346: [Full GC (Metadata GC Threshold)  7521M->7002M(46144M), 1.9242692 secs]
   [Eden: 0.0B(1760.0M)->0.0B(2304.0M) Survivors: 544.0M->0.0B Heap: 7521.7M(46144.0M)->7002.8M(46144.0M)], [Metaspace: 1792694K->291615K(698368K)]
 [Times: user=2.09 sys=0.19, real=1.92 secs]
79.619: [GC pause (G1 Evacuation Pause) (mixed)79.636: [SoftReference, 1 refs, 0.0000415 secs]79.636: [WeakReference, 2 refs, 0.0000061 secs]79.636: [FinalReference, 3 refs, 0.0000049 secs]79.636: [PhantomReference, 4 refs, 5 refs, 0.0000052 secs]79.636: [JNI Weak Reference, 0.0000117 secs] (to-space exhausted), 0.0264971 secs]
   [Parallel Time: 20.5 ms, GC Workers: 4]
      [GC Worker Start (ms): Min: 1398294.3, Avg: 1398294.4, Max: 1398294.5, Diff: 0.2]
      [Ext Root Scanning (ms): Min: 1.8, Avg: 2.0, Max: 2.2, Diff: 0.4, Sum: 15.7]
      [Update RS (ms): Min: 1.2, Avg: 1.5, Max: 1.7, Diff: 0.5, Sum: 11.8]
         [Processed Buffers: Min: 21, Avg: 27.0, Max: 30, Diff: 9, Sum: 216]
      [Scan RS (ms): Min: 1.8, Avg: 1.9, Max: 2.2, Diff: 0.4, Sum: 15.5]
      [Code Root Scanning (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Object Copy (ms): Min: 14.5, Avg: 14.7, Max: 14.9, Diff: 0.4, Sum: 118.0]
      [Termination (ms): Min: 0.0, Avg: 0.1, Max: 0.1, Diff: 0.1, Sum: 0.5]
         [Termination Attempts: Min: 1, Avg: 148.2, Max: 181, Diff: 180, Sum: 1186]
      [GC Worker Other (ms): Min: 0.0, Avg: 0.0, Max: 0.1, Diff: 0.0, Sum: 0.3]
      [GC Worker Total (ms): Min: 20.1, Avg: 20.2, Max: 20.3, Diff: 0.2, Sum: 161.9]
      [GC Worker End (ms): Min: 1398314.7, Avg: 1398314.7, Max: 1398314.7, Diff: 0.0]
   [Code Root Fixup: 0.0 ms]
   [Code Root Purge: 0.0 ms]
   [Clear CT: 0.5 ms]
   [Other: 10.4 ms]
      [Choose CSet: 0.0 ms]
      [Ref Proc: 8.8 ms]
      [Ref Enq: 0.3 ms]
      [Redirty Cards: 0.2 ms]
      [Free CSet: 0.1 ms]
   [Eden: 2304.0M(2304.0M)->0.0B(2304.0M) Survivors: 192.0M->192.0M Heap: 15.0G(19.8G)->12.8G(19.8G)]
 [Times: user=0.17 sys=0.00, real=0.03 secs]"""

_JDK8_G1_ADAPTIVE_LOG = """\
2022-02-09T15:55:55.807+0800: 0.683: [GC pause (G1 Evacuation Pause) (young)
Desired survivor size 3670016 bytes, new threshold 15 (max 15)
 0.683: [G1Ergonomics (CSet Construction) start choosing CSet, _pending_cards: 0, predicted base time: 10.00 ms, remaining time: 240.00 ms, target pause time: 250.00 ms]
 0.683: [G1Ergonomics (CSet Construction) add young regions to CSet, eden: 51 regions, survivors: 0 regions, predicted young region time: 1298.76 ms]
 0.683: [G1Ergonomics (CSet Construction) finish choosing CSet, eden: 51 regions, survivors: 0 regions, old: 0 regions, predicted pause time: 1308.76 ms, target pause time: 250.00 ms]
, 0.0085898 secs]
   [Parallel Time: 5.5 ms, GC Workers: 4]
      [GC Worker Start (ms): Min: 682.6, Avg: 682.6, Max: 682.7, Diff: 0.0]
      [Ext Root Scanning (ms): Min: 0.8, Avg: 1.2, Max: 1.6, Diff: 0.8, Sum: 4.8]
      [Update RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
         [Processed Buffers: Min: 0, Avg: 0.0, Max: 0, Diff: 0, Sum: 0]
      [Scan RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Code Root Scanning (ms): Min: 0.0, Avg: 0.2, Max: 0.9, Diff: 0.9, Sum: 0.9]
      [Object Copy (ms): Min: 3.5, Avg: 3.9, Max: 4.5, Diff: 1.0, Sum: 15.7]
      [Termination (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.1]
         [Termination Attempts: Min: 1, Avg: 6.8, Max: 9, Diff: 8, Sum: 27]
      [GC Worker Other (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.1]
      [GC Worker Total (ms): Min: 5.4, Avg: 5.4, Max: 5.4, Diff: 0.0, Sum: 21.6]
      [GC Worker End (ms): Min: 688.1, Avg: 688.1, Max: 688.1, Diff: 0.0]
   [Code Root Fixup: 0.0 ms]
   [Code Root Purge: 0.0 ms]
   [Clear CT: 0.1 ms]
   [Other: 3.0 ms]
      [Choose CSet: 0.0 ms]
      [Ref Proc: 2.6 ms]
      [Ref Enq: 0.0 ms]
      [Redirty Cards: 0.1 ms]
      [Humongous Register: 0.0 ms]
      [Humongous Reclaim: 0.0 ms]
      [Free CSet: 0.1 ms]
   [Eden: 52224.0K(52224.0K)->0.0B(45056.0K) Survivors: 0.0B->7168.0K Heap: 52224.0K(1024.0M)->8184.0K(1024.0M)]
 [Times: user=0.02 sys=0.01, real=0.01 secs] """

_JDK8_DATESTAMP_LOG = """\
2022-04-25T11:38:47.548+0800: 725.062: [GC pause (G1 Evacuation Pause) (young) (initial-mark) 725.062: [G1Ergonomics (CSet Construction) start choosing CSet, _pending_cards: 5369, predicted base time: 22.02 ms, remaining time: 177.98 ms, target pause time: 200.00 ms]
 725.062: [G1Ergonomics (CSet Construction) add young regions to CSet, eden: 10 regions, survivors: 1 regions, predicted young region time: 2.34 ms]
 725.062: [G1Ergonomics (CSet Construction) finish choosing CSet, eden: 10 regions, survivors: 1 regions, old: 0 regions, predicted pause time: 24.37 ms, target pause time: 200.00 ms]
, 0.0182684 secs]
   [Parallel Time: 17.4 ms, GC Workers: 4]
      [GC Worker Start (ms): Min: 725063.0, Avg: 725063.0, Max: 725063.0, Diff: 0.0]
      [Ext Root Scanning (ms): Min: 7.6, Avg: 7.9, Max: 8.4, Diff: 0.8, Sum: 31.6]
      [Update RS (ms): Min: 2.6, Avg: 2.7, Max: 2.9, Diff: 0.3, Sum: 10.8]
         [Processed Buffers: Min: 6, Avg: 6.8, Max: 7, Diff: 1, Sum: 27]
      [Scan RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Code Root Scanning (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Object Copy (ms): Min: 5.4, Avg: 6.1, Max: 6.5, Diff: 1.1, Sum: 24.5]
      [Termination (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.1]
         [Termination Attempts: Min: 1, Avg: 4.8, Max: 8, Diff: 7, Sum: 19]
      [GC Worker Other (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.1]
      [GC Worker Total (ms): Min: 16.8, Avg: 16.8, Max: 16.8, Diff: 0.0, Sum: 67.1]
      [GC Worker End (ms): Min: 725079.8, Avg: 725079.8, Max: 725079.8, Diff: 0.0]
   [Code Root Fixup: 0.0 ms]
   [Code Root Purge: 0.0 ms]
   [Clear CT: 0.1 ms]
   [Other: 0.7 ms]
      [Choose CSet: 0.0 ms]
      [Ref Proc: 0.1 ms]
      [Ref Enq: 0.0 ms]
      [Redirty Cards: 0.1 ms]
      [Humongous Register: 0.0 ms]
      [Humongous Reclaim: 0.0 ms]
      [Free CSet: 0.0 ms]
   [Eden: 320.0M(320.0M)->0.0B(320.0M) Survivors: 32768.0K->32768.0K Heap: 2223.9M(2560.0M)->1902.5M(2560.0M)]
 [Times: user=0.07 sys=0.00, real=0.02 secs]
2022-04-25T11:38:47.567+0800: 2022-04-25T11:38:47.567+0800: 725.081: 725.081: Total time for which application threads were stopped: 0.0227079 seconds, Stopping threads took: 0.0000889 seconds
[GC concurrent-root-region-scan-start]
2022-04-25T11:38:47.581+0800: 725.095: Application time: 0.0138476 seconds
2022-04-25T11:38:47.585+0800: 725.099: Total time for which application threads were stopped: 0.0042001 seconds, Stopping threads took: 0.0000809 seconds
2022-04-25T11:38:47.613+0800: 725.127: [GC concurrent-root-region-scan-end, 0.0460720 secs]
2022-04-25T11:38:47.613+0800: 725.127: [GC concurrent-mark-start]
2022-04-25T11:38:51.924+0800: 729.438: [GC pause (G1 Evacuation Pause) (young) 729.438: [G1Ergonomics (CSet Construction) start choosing CSet, _pending_cards: 4375, predicted base time: 22.74 ms, remaining time: 177.26 ms, target pause time: 200.00 ms]
 729.438: [G1Ergonomics (CSet Construction) add young regions to CSet, eden: 10 regions, survivors: 1 regions, predicted young region time: 4.90 ms]
 729.438: [G1Ergonomics (CSet Construction) finish choosing CSet, eden: 10 regions, survivors: 1 regions, old: 0 regions, predicted pause time: 27.64 ms, target pause time: 200.00 ms]
, 0.0535660 secs]
   [Parallel Time: 52.5 ms, GC Workers: 4]
      [GC Worker Start (ms): Min: 729438.4, Avg: 729438.5, Max: 729438.5, Diff: 0.0]
      [Ext Root Scanning (ms): Min: 5.2, Avg: 5.9, Max: 6.9, Diff: 1.8, Sum: 23.7]
      [Update RS (ms): Min: 1.7, Avg: 2.5, Max: 3.3, Diff: 1.7, Sum: 10.0]
         [Processed Buffers: Min: 4, Avg: 6.0, Max: 7, Diff: 3, Sum: 24]
      [Scan RS (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Code Root Scanning (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.0]
      [Object Copy (ms): Min: 5.6, Avg: 5.7, Max: 6.1, Diff: 0.5, Sum: 22.9]
      [Termination (ms): Min: 37.2, Avg: 37.5, Max: 38.2, Diff: 1.0, Sum: 149.9]
         [Termination Attempts: Min: 1, Avg: 10.8, Max: 17, Diff: 16, Sum: 43]
      [GC Worker Other (ms): Min: 0.0, Avg: 0.0, Max: 0.0, Diff: 0.0, Sum: 0.1]
      [GC Worker Total (ms): Min: 51.4, Avg: 51.7, Max: 52.4, Diff: 0.9, Sum: 206.7]
      [GC Worker End (ms): Min: 729489.9, Avg: 729490.1, Max: 729490.8, Diff: 0.9]
   [Code Root Fixup: 0.0 ms]
   [Code Root Purge: 0.0 ms]
   [Clear CT: 0.1 ms]
   [Other: 1.0 ms]
      [Choose CSet: 0.0 ms]
      [Ref Proc: 0.4 ms]
      [Ref Enq: 0.0 ms]
      [Redirty Cards: 0.0 ms]
      [Humongous Register: 0.0 ms]
      [Humongous Reclaim: 0.0 ms]
      [Free CSet: 0.0 ms]
   [Eden: 320.0M(320.0M)->0.0B(320.0M) Survivors: 32768.0K->32768.0K Heap: 2230.5M(2560.0M)->1906.2M(2560.0M)]
 [Times: user=0.06 sys=0.01, real=0.05 secs]
2022-04-25T11:38:51.978+0800: 729.492: Total time for which application threads were stopped: 0.0578224 seconds, Stopping threads took: 0.0000709 seconds
2022-04-25T11:38:52.409+0800: 729.923: Application time: 0.4310531 seconds
2022-04-25T11:38:52.944+0800: 730.458: [GC concurrent-mark-end, 5.3312732 secs]
2022-04-25T11:38:52.944+0800: 730.458: Application time: 0.1087156 seconds
2022-04-25T11:38:52.949+0800: 730.463: [GC remark 2022-04-25T11:38:52.949+0800: 730.463: [Finalize Marking, 0.0014784 secs] 2022-04-25T11:38:52.950+0800: 730.464: [GC ref-proc, 0.0007278 secs] 2022-04-25T11:38:52.951+0800: 730.465: [Unloading, 0.1281692 secs], 0.1350560 secs]
 [Times: user=0.21 sys=0.01, real=0.13 secs]
2022-04-25T11:38:53.084+0800: 730.598: Total time for which application threads were stopped: 0.1396855 seconds, Stopping threads took: 0.0000545 seconds
2022-04-25T11:38:53.084+0800: 730.598: Application time: 0.0000928 seconds
2022-04-25T11:38:53.089+0800: 730.603: [GC cleanup 1984M->1984M(2560M), 0.0016114 secs]
 [Times: user=0.01 sys=0.00, real=0.01 secs]
"""

_JDK8_PARALLEL_LOG = """\
0.141: [GC (Allocation Failure) [PSYoungGen: 25145K->4077K(29696K)] 25145K->16357K(98304K), 0.0225874 secs] [Times: user=0.10 sys=0.01, real=0.03 secs]
0.269: [Full GC (Ergonomics) [PSYoungGen: 4096K->0K(55296K)] [ParOldGen: 93741K->67372K(174592K)] 97837K->67372K(229888K), [Metaspace: 3202K->3202K(1056768K)], 0.6862093 secs] [Times: user=2.60 sys=0.02, real=0.69 secs]
0.962: [GC (Allocation Failure) [PSYoungGen: 51200K->4096K(77824K)] 118572K->117625K(252416K), 0.0462864 secs] [Times: user=0.29 sys=0.01, real=0.05 secs]
1.872: [Full GC (Ergonomics) [PSYoungGen: 4096K->0K(103936K)] [ParOldGen: 169794K->149708K(341504K)] 173890K->149708K(445440K), [Metaspace: 3202K->3202K(1056768K)], 1.3724621 secs] [Times: user=8.33 sys=0.01, real=1.38 secs]
3.268: [GC (Allocation Failure) [PSYoungGen: 99840K->56802K(113664K)] 249548K->302089K(455168K), 0.1043993 secs] [Times: user=0.75 sys=0.06, real=0.10 secs]
14.608: [Full GC (Ergonomics) [PSYoungGen: 65530K->0K(113664K)] [ParOldGen: 341228K->720K(302592K)] 406759K->720K(416256K), [Metaspace: 3740K->3737K(1056768K)], 0.0046781 secs] [Times: user=0.02 sys=0.01, real=0.00 secs]
"""

_JDK8_SERIAL_LOG = """\
2021-12-07T11:18:11.688+0800: #0: [GC (Allocation Failure) 2021-12-07T11:18:11.688+0800: #0: [DefNew: 69952K->8704K(78656K), 0.0591895 secs] 69952K->56788K(253440K), 0.0592437 secs] [Times: user=0.05 sys=0.02, real=0.06 secs] 
2021-12-07T11:18:11.756+0800: #1: [GC (Allocation Failure) 2021-12-07T11:18:11.756+0800: #1: [DefNew: 78656K->8703K(78656K), 0.0700624 secs] 126740K->114869K(253440K), 0.0701086 secs] [Times: user=0.05 sys=0.01, real=0.07 secs] 
2021-12-07T11:18:11.833+0800: #2: [GC (Allocation Failure) 2021-12-07T11:18:11.833+0800: #2: [DefNew: 78655K->8703K(78656K), 0.0837783 secs]2021-12-07T11:18:11.917+0800: #3: [Tenured: 176115K->174136K(176128K), 0.1988447 secs] 184821K->174136K(254784K), [Metaspace: 3244K->3244K(1056768K)], 0.2828418 secs] [Times: user=0.27 sys=0.02, real=0.28 secs] 
2021-12-07T11:18:12.140+0800: #4: [GC (Allocation Failure) 2021-12-07T11:18:12.140+0800: #4: [DefNew: 116224K->14463K(130688K), 0.1247689 secs] 290360K->290358K(420916K), 0.1248360 secs] [Times: user=0.10 sys=0.03, real=0.12 secs] 
2021-12-07T11:18:12.273+0800: #5: [GC (Allocation Failure) 2021-12-07T11:18:12.273+0800: #5: [DefNew: 102309K->14463K(130688K), 0.1181527 secs]2021-12-07T11:18:12.391+0800: #6: [Tenured: 362501K->362611K(362612K), 0.3681604 secs] 378203K->376965K(493300K), [Metaspace: 3244K->3244K(1056768K)], 0.4867024 secs] [Times: user=0.46 sys=0.03, real=0.49 secs] 
2021-12-07T11:18:12.809+0800: #7: [GC (Allocation Failure) 2021-12-07T11:18:12.809+0800: #7: [DefNew: 227109K->30207K(272000K), 0.3180977 secs] 589721K->581277K(876356K), 0.3181286 secs] [Times: user=0.27 sys=0.05, real=0.32 secs] 
2021-12-07T11:18:13.160+0800: #8: [GC (Allocation Failure) 2021-12-07T11:18:13.160+0800: #8: [DefNew: 271999K->30207K(272000K), 0.2782985 secs]2021-12-07T11:18:13.438+0800: #9: [Tenured: 785946K->756062K(786120K), 0.8169720 secs] 823069K->756062K(1058120K), [Metaspace: 3782K->3782K(1056768K)], 1.0959870 secs] [Times: user=1.03 sys=0.07, real=1.09 secs] 
2021-12-07T11:18:14.386+0800: #10: [GC (Allocation Failure) 2021-12-07T11:18:14.386+0800: #10: [DefNew: 504128K->62975K(567104K), 0.5169362 secs] 1260190K->1260189K(1827212K), 0.5169650 secs] [Times: user=0.40 sys=0.12, real=0.52 secs] """

_JDK8_INTERLEAVE_LOG = """\
2022-08-02T10:26:05.043+0800: 61988.328: [GC (Allocation Failure) 2022-08-02T10:26:05.043+0800: 61988.328: [ParNew: 2621440K->2621440K(2883584K), 0.0000519 secs]2022-08-02T10:26:05.043+0800: 61988.328: [CMS: 1341593K->1329988K(2097152K), 2.0152293 secs] 3963033K->1329988K(4980736K), [Metaspace: 310050K->309844K(1343488K)], 2.0160411 secs] [Times: user=1.98 sys=0.05, real=2.01 secs] """

_INCOMPLETE_LOG = """\
[0.510s][info][gc,heap      ] GC(0) CMS: 0K->24072K(174784K)
[0.510s][info][gc,metaspace ] GC(0) Metaspace: 6531K->6530K(1056768K)
[0.510s][info][gc           ] GC(0) Pause Young (Allocation Failure) 68M->32M(247M) 31.208ms
[0.510s][info][gc,cpu       ] GC(0) User=0.06s Sys=0.03s Real=0.03s
[3.231s][info][gc,start     ] GC(1) Pause Initial Mark
[3.235s][info][gc           ] GC(1) Pause Initial Mark 147M->147M(247M) 3.236ms
[3.235s][info][gc,cpu       ] GC(1) User=0.01s Sys=0.02s Real=0.03s
[3.235s][info][gc           ] GC(1) Concurrent Mark
[3.235s][info][gc,task      ] GC(1) Using 2 workers of 2 for marking
[3.257s][info][gc           ] GC(1) Concurrent Mark 22.229ms
[3.257s][info][gc,cpu       ] GC(1) User=0.07s Sys=0.00s Real=0.03s
[3.257s][info][gc           ] GC(1) Concurrent Preclean
[3.257s][info][gc           ] GC(1) Concurrent Preclean 0.264ms
[3.257s][info][gc,cpu       ] GC(1) User=0.00s Sys=0.00s Real=0.00s
[3.257s][info][gc,start     ] GC(1) Pause Remark
[3.259s][info][gc           ] GC(1) Pause Remark 149M->149M(247M) 1.991ms
[3.259s][info][gc,cpu       ] GC(1) User=0.02s Sys=0.03s Real=0.01s
[3.259s][info][gc           ] GC(1) Concurrent Sweep
[3.279s][info][gc           ] GC(1) Concurrent Sweep 19.826ms
[3.279s][info][gc,cpu       ] GC(1) User=0.03s Sys=0.00s Real=0.02s
[3.279s][info][gc           ] GC(1) Concurrent Reset
[3.280s][info][gc           ] GC(1) Concurrent Reset 0.386ms
[3.280s][info][gc,cpu       ] GC(1) User=0.00s Sys=0.00s Real=0.00s
[3.280s][info][gc,heap      ] GC(1) Old: 142662K->92308K(174784K)
[8.970s][info][gc,start     ] GC(2) Pause Full (Allocation Failure)
[8.970s][info][gc,phases,start] GC(2) Phase 1: Mark live objects
[9.026s][info][gc,phases      ] GC(2) Phase 1: Mark live objects 55.761ms
[9.026s][info][gc,phases,start] GC(2) Phase 2: Compute new object addresses
[9.051s][info][gc,phases      ] GC(2) Phase 2: Compute new object addresses 24.761ms
[9.051s][info][gc,phases,start] GC(2) Phase 3: Adjust pointers
"""


# ----------------------------------------------------------------------
# helpers
# ----------------------------------------------------------------------


def parse_log(text: str) -> GCModel:
    """Detect the parser for ``text`` and parse it without deriving anything."""
    lines = text.splitlines()
    return get_parser(lines).parse(lines)


def analyze_log(text: str) -> GCModel:
    model = parse_log(text)
    model.calculate_derived_info()
    return model


# ----------------------------------------------------------------------
# fixtures
# ----------------------------------------------------------------------


@pytest.fixture
def jdk11_g1_log() -> str:
    return _JDK11_G1_LOG


@pytest.fixture
def jdk11_g1_region_log() -> str:
    return _JDK11_G1_REGION_LOG


@pytest.fixture
def jdk11_zgc_log() -> str:
    return _JDK11_ZGC_LOG


@pytest.fixture
def jdk11_serial_log() -> str:
    return _JDK11_SERIAL_LOG


@pytest.fixture
def jdk11_parallel_log() -> str:
    return _JDK11_PARALLEL_LOG


@pytest.fixture
def jdk11_cms_log() -> str:
    return _JDK11_CMS_LOG


@pytest.fixture
def jdk11_interleave_log() -> str:
    return _JDK11_INTERLEAVE_LOG


@pytest.fixture
def jdk8_cms_log() -> str:
    return _JDK8_CMS_LOG


@pytest.fixture
def jdk8_g1_log() -> str:
    return _JDK8_G1_LOG


@pytest.fixture
def jdk8_g1_adaptive_log() -> str:
    return _JDK8_G1_ADAPTIVE_LOG


@pytest.fixture
def jdk8_datestamp_log() -> str:
    return _JDK8_DATESTAMP_LOG


@pytest.fixture
def jdk8_parallel_log() -> str:
    return _JDK8_PARALLEL_LOG


@pytest.fixture
def jdk8_serial_log() -> str:
    return _JDK8_SERIAL_LOG


@pytest.fixture
def jdk8_interleave_log() -> str:
    return _JDK8_INTERLEAVE_LOG


@pytest.fixture
def incomplete_cms_log() -> str:
    return _INCOMPLETE_LOG
