"""
Constants and default values for entropy analysis and crop solving.
"""

# Analyzer defaults
DEFAULT_BLOCK_SIZE = 16
DEFAULT_HIGH_ENTROPY_THRESHOLD = 0.2
DEFAULT_MIN_PERCENTAGE = 50

# ITU-R BT.601 luma weights (R, G, B)
LUMINANCE_WEIGHTS = (0.299, 0.587, 0.114)

# Histogram over 8-bit luminance
HISTOGRAM_BINS = 256

# log2(HISTOGRAM_BINS), upper bound of block entropy
MAX_ENTROPY = 8.0

# Channels per pixel in a PixelBuffer (RGBA)
PIXEL_CHANNELS = 4

# Fit mode reported in every crop result
FIT_MODE = 'cover'

# Percentage used when an axis has no offset freedom or no point of interest
CENTER_PERCENT = 50.0

# Output encoding defaults for materialized crops
DEFAULT_OUTPUT_PARAMS = {
    'format': 'JPEG',
    'quality': 95,
}

# Supported raster backends
RASTER_BACKENDS = ('pillow', 'opencv')

# CSS url(...) extraction: url("..."), url('...') or url(...)
CSS_URL_PATTERN = r'url\([\'"]?(.*?)[\'"]?\)'

# Box model properties subtracted from the bounding rect for content-box elements
HORIZONTAL_BOX_PROPERTIES = (
    'padding-left',
    'padding-right',
    'border-left-width',
    'border-right-width',
)
VERTICAL_BOX_PROPERTIES = (
    'padding-top',
    'padding-bottom',
    'border-top-width',
    'border-bottom-width',
)
