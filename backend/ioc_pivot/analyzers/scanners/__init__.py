from ioc_pivot.analyzers.scanners.hybrid_analysis import HybridAnalysisScanner
from ioc_pivot.analyzers.scanners.urlscan import URLScanScanner
from ioc_pivot.analyzers.scanners.virustotal import VirusTotalScanner
