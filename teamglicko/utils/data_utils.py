"""Classes for working with rating period data"""

from typing import List, Optional
import numpy as np
import polars as pl


class MatchupDataset:
    """
    Paired comparison results grouped into rating periods.

    Rows are assumed to be sorted by time step, every contiguous run of equal
    time steps is one rating period.
    """

    def __init__(
        self,
        df: pl.DataFrame,
        competitor_cols: List[str],
        outcome_col: str,
        time_step_col: str,
        verbose: bool = True,
    ):
        if len(competitor_cols) != 2:
            raise ValueError(f'Expected exactly 2 competitor columns, got {competitor_cols}')
        self._init_competitors(df, competitor_cols)
        self._init_matchups(df, competitor_cols)
        self.outcomes = df[outcome_col].cast(pl.Float64).to_numpy()
        self.time_steps = df[time_step_col].to_numpy()
        self._process_time_steps()

        if verbose:
            self._print_stats()

    def _init_competitors(self, df: pl.DataFrame, competitor_cols: List[str]):
        """Initialize competitor metadata."""
        competitor_series = pl.concat([df[col].cast(pl.Utf8) for col in competitor_cols])
        self.competitors = sorted(competitor_series.unique().to_list())
        self.num_competitors = len(self.competitors)
        self.competitor_to_idx = dict(zip(self.competitors, range(self.num_competitors)))

    def _init_matchups(self, df: pl.DataFrame, competitor_cols: List[str]):
        """Create numerical matchup indices."""
        competitors_df = pl.DataFrame({'competitor': self.competitors}).lazy()
        indexed = competitors_df.with_columns(pl.int_range(pl.len(), dtype=pl.Int64).alias('index'))

        matchups_df = (
            df.lazy()
            .with_row_index('row')
            .select([
                pl.col('row'),
                pl.col(competitor_cols[0]).cast(pl.Utf8).alias('comp1'),
                pl.col(competitor_cols[1]).cast(pl.Utf8).alias('comp2'),
            ])
            .join(indexed.rename({'index': 'index1'}), left_on='comp1', right_on='competitor')
            .join(indexed.rename({'index': 'index2'}), left_on='comp2', right_on='competitor')
            .sort('row')
            .select(['index1', 'index2'])
        )
        self.matchups = np.ascontiguousarray(matchups_df.collect().to_numpy())

    def _process_time_steps(self):
        """Calculate rating period boundaries."""
        if len(self.time_steps) == 0:
            self.unique_time_steps = self.time_steps
            self.time_step_end_idxs = np.zeros(0, dtype=np.int64)
            return
        change_idxs = np.flatnonzero(np.diff(self.time_steps)) + 1
        self.unique_time_steps = self.time_steps[np.concatenate(([0], change_idxs))]
        self.time_step_end_idxs = np.append(change_idxs, len(self.time_steps))

    def _print_stats(self):
        """Print dataset statistics."""
        print('Loaded dataset with:')
        print(f'{len(self)} matchups')
        print(f'{self.num_competitors} unique competitors')
        print(f'{len(self.unique_time_steps)} rating periods')

    def __len__(self):
        return self.matchups.shape[0]

    def __iter__(self):
        """Iterate through rating periods."""
        start_idx = 0
        for time_step, end_idx in zip(self.unique_time_steps, self.time_step_end_idxs):
            yield self.matchups[start_idx:end_idx], self.outcomes[start_idx:end_idx], int(time_step)
            start_idx = end_idx

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self.init_from_arrays(
                time_steps=self.time_steps[key],
                matchups=self.matchups[key],
                outcomes=self.outcomes[key],
                competitors=self.competitors,
            )
        raise ValueError('Only slice indexing supported')

    @classmethod
    def init_from_arrays(
        cls,
        time_steps: np.ndarray,
        matchups: np.ndarray,
        outcomes: np.ndarray,
        competitors: Optional[list] = None,
    ):
        """Factory method for creating datasets from arrays of competitor indices."""
        dataset = cls.__new__(cls)
        dataset.time_steps = np.asarray(time_steps)
        dataset.matchups = np.asarray(matchups)
        dataset.outcomes = np.asarray(outcomes, dtype=np.float64)
        if competitors is None:
            competitors = list(range(int(dataset.matchups.max()) + 1))
        dataset.competitors = competitors
        dataset.num_competitors = len(competitors)
        dataset.competitor_to_idx = dict(zip(competitors, range(len(competitors))))
        dataset._process_time_steps()
        return dataset
