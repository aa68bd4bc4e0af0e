"""
Chart Generator Service
Generate matplotlib survey charts and save to BytesIO for Excel embedding
"""
import logging
from io import BytesIO
from typing import Optional

import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Use non-GUI backend
import matplotlib.pyplot as plt

from config.settings import COMPLIANCE_MIN_RSRP, COMPLIANCE_MIN_SINR

log = logging.getLogger(__name__)


class ChartGenerator:
    """Generate charts for survey signal data"""

    def __init__(self):
        self.setup_matplotlib_style()

    def setup_matplotlib_style(self):
        """Setup modern matplotlib style"""
        plt.style.use('seaborn-v0_8-darkgrid')
        plt.rcParams['figure.figsize'] = (12, 6)
        plt.rcParams['font.size'] = 10
        plt.rcParams['axes.labelsize'] = 11
        plt.rcParams['axes.titlesize'] = 13
        plt.rcParams['legend.fontsize'] = 9

    def generate_signal_chart(self, df: pd.DataFrame, title: str = "Survey Signal") -> Optional[BytesIO]:
        """RSRP and SINR over the live samples, None when nothing is live"""
        if len(df) == 0:
            log.warning("No samples for signal chart")
            return None

        live = df[df["LIVE"]]
        if len(live) == 0:
            log.warning("No live samples for signal chart")
            return None

        sample_no = pd.Series(range(1, len(live) + 1), index=live.index)
        rsrp = live["RSRP"].dropna()
        sinr = live["SINR"].dropna()

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
        fig.suptitle(title, fontsize=14, fontweight='bold')

        ax1.plot(sample_no.loc[rsrp.index].tolist(), rsrp.tolist(), marker='o', linewidth=2, markersize=4,
                 label='RSRP', color='#0078d4')
        ax1.axhline(y=COMPLIANCE_MIN_RSRP, color='green', linestyle='--',
                    linewidth=2, label=f'Baseline: {COMPLIANCE_MIN_RSRP} dBm', alpha=0.7)
        ax1.set_ylabel('RSRP (dBm)')
        ax1.grid(True, alpha=0.3)
        ax1.legend(loc='best')

        ax2.plot(sample_no.loc[sinr.index].tolist(), sinr.tolist(), marker='o', linewidth=2, markersize=4,
                 label='SINR', color='#d47800')
        ax2.axhline(y=COMPLIANCE_MIN_SINR, color='green', linestyle='--',
                    linewidth=2, label=f'Baseline: {COMPLIANCE_MIN_SINR} dB', alpha=0.7)
        ax2.set_xlabel('Sample')
        ax2.set_ylabel('SINR (dB)')
        ax2.grid(True, alpha=0.3)
        ax2.legend(loc='best')

        plt.tight_layout()

        buf = BytesIO()
        plt.savefig(buf, format='png', dpi=100, bbox_inches='tight')
        buf.seek(0)
        plt.close(fig)

        return buf
