#single fit and bootstrap (the main entry points)
from .fit import single_fit as single_fit
from .bootstrap import bootstrap_fit as bootstrap_fit
from .xmin import FitResult
from .bootstrap import AggregateResult

#xmin search (exposes the whole KS curve, if you want to look at it)
from .xmin import xmin_grid
from .xmin import scan_xmin
from .xmin import search_xmin

#likelihoods (contains likelihoods, MLE, and generator functions)
from .likelihoods import find_alpha
from .likelihoods import find_alpha_discrete
from .likelihoods import pl_like
from .likelihoods import pl_like_discrete
from .likelihoods import finite_size_correction
from .likelihoods import pl_gen
from .likelihoods import pl_gen_discrete

#KS distances
from .distances import find_d_sorted
from .distances import find_d_sorted_discrete

#bootstrap helpers
from .bootstrap import mean_sd
from .bootstrap import resample_idx

#reading data
from .get_sample import get_sample
from .get_sample import InputError

#defaults
from .xmin import START_XMIN, INCREMENT_XMIN, END_XMIN
from .bootstrap import NUM_RUNS
