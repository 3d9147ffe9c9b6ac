"""Helper utilities for constructing temporary model source trees in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Mapping

from schemagen.config import RunConfig

CATALOG_MEMBER = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var DeveloperError = require('terriajs-cesium/Source/Core/DeveloperError');

/**
 * A member of a catalog, either an item or a group.
 *
 * @alias CatalogMember
 * @constructor
 * @abstract
 *
 * @param {Terria} terria The Terria instance.
 */
var CatalogMember = function(terria) {
    this._terria = terria;

    /**
     * Gets or sets the name of the item.  This property is observable.
     * @type {String}
     */
    this.name = 'Unnamed Item';

    /**
     * Gets or sets the description of the item.  This property is observable.
     * @type {String}
     */
    this.description = '';

    /**
     * Gets or sets a value indicating whether this member is hidden in the catalog.
     * @type {Boolean}
     */
    this.isHidden = false;

    /**
     * Gets or sets the geographic rectangle covered by this member.
     * @type {Rectangle}
     */
    this.rectangle = undefined;
};

defineProperties(CatalogMember.prototype, {
    /**
     * Gets the type of data member represented by this instance.
     * @memberOf CatalogMember.prototype
     * @type {String}
     */
    type : {
        get : function() {
            throw new DeveloperError('Types derived from CatalogMember must implement a "type" property.');
        }
    }
});

module.exports = CatalogMember;
"""

CATALOG_ITEM = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var inherit = require('../Core/inherit');
var CatalogMember = require('./CatalogMember');

/**
 * A data item in a {@link CatalogGroup}.
 *
 * @alias CatalogItem
 * @constructor
 * @extends CatalogMember
 * @abstract
 */
var CatalogItem = function(terria) {
    CatalogMember.call(this, terria);

    /**
     * Gets or sets the URL of this data source.  This property is observable.
     * @type {String}
     */
    this.url = undefined;

    /**
     * Gets or sets a value indicating whether this data source is enabled.
     * @type {Boolean}
     * @editortitle Enabled
     */
    this.isEnabled = false;
};

inherit(CatalogMember, CatalogItem);

defineProperties(CatalogItem.prototype, {
    /**
     * Gets a value indicating whether this item has a legend.
     * @memberOf CatalogItem.prototype
     * @type {Boolean}
     */
    hasLegend : {
        get : function() {
            return false;
        }
    }
});

module.exports = CatalogItem;
"""

CATALOG_GROUP = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var inherit = require('../Core/inherit');
var CatalogMember = require('./CatalogMember');

/**
 * A group of data items and other groups in the catalog.
 *
 * @alias CatalogGroup
 * @constructor
 * @extends CatalogMember
 */
var CatalogGroup = function(terria) {
    CatalogMember.call(this, terria);

    /**
     * Gets or sets a value indicating whether the group is currently expanded.
     * @type {Boolean}
     */
    this.isOpen = false;

    /**
     * Gets the collection of items in this group.
     * @type {CatalogMember[]}
     */
    this.items = [];
};

inherit(CatalogMember, CatalogGroup);

defineProperties(CatalogGroup.prototype, {
    type : {
        get : function() {
            return 'group';
        }
    },

    typeName : {
        get : function() {
            return 'Group';
        }
    }
});

module.exports = CatalogGroup;
"""

IMAGERY_LAYER_CATALOG_ITEM = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var inherit = require('../Core/inherit');
var CatalogItem = require('./CatalogItem');

/**
 * A {@link CatalogItem} that is added to the map as a rasterized imagery layer.
 *
 * @alias ImageryLayerCatalogItem
 * @constructor
 * @extends CatalogItem
 * @abstract
 */
var ImageryLayerCatalogItem = function(terria) {
    CatalogItem.call(this, terria);

    /**
     * Gets or sets the opacity of the layer, from 0.0 to 1.0.
     * @type {Number}
     */
    this.opacity = 0.6;
};

inherit(CatalogItem, ImageryLayerCatalogItem);

defineProperties(ImageryLayerCatalogItem.prototype, {
    /**
     * Gets the imagery layer shown on the map.
     * @memberOf ImageryLayerCatalogItem.prototype
     * @type {Object}
     */
    imageryLayer : {
        get : function() {
            return this._imageryLayer;
        }
    }
});

module.exports = ImageryLayerCatalogItem;
"""

WEB_MAP_SERVICE_CATALOG_ITEM = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var inherit = require('../Core/inherit');
var ImageryLayerCatalogItem = require('./ImageryLayerCatalogItem');

/**
 * A {@link ImageryLayerCatalogItem} representing a layer from a Web Map Service (WMS) server.
 *
 * @alias WebMapServiceCatalogItem
 * @constructor
 * @extends ImageryLayerCatalogItem
 * @editortitle Web Map Service (WMS)
 */
var WebMapServiceCatalogItem = function(terria) {
    ImageryLayerCatalogItem.call(this, terria);

    /**
     * Gets or sets the WMS layers to include.  To specify multiple layers, separate them
     * with a commas.  This property is observable.
     * @type {String}
     */
    this.layers = '';

    /**
     * Gets or sets the URL of the WMS server's legend.
     * @type {String}
     */
    this.wmsUrl = undefined;

    /**
     * Gets or sets the template used to display feature info, see {@link CatalogItem#featureInfoTemplate}.
     * @type {Object}
     */
    this.featureInfoTemplate = undefined;

    /**
     * Gets or sets the formats in which to request feature information.
     * @type {GetFeatureInfoFormat[]}
     */
    this.getFeatureInfoFormats = undefined;

    /**
     * Gets or sets the scale denominators at which the layer is drawn.
     * @type {Array}
     * @editortype Number[]
     * @editoritemstitle Scale
     */
    this.scaleDenominators = undefined;
};

inherit(ImageryLayerCatalogItem, WebMapServiceCatalogItem);

defineProperties(WebMapServiceCatalogItem.prototype, {
    type : {
        get : function() {
            return 'wms';
        }
    },

    typeName : {
        get : function() {
            return 'Web Map Service (WMS)';
        }
    }
});

module.exports = WebMapServiceCatalogItem;
"""

CSV_CATALOG_ITEM = """
'use strict';

var defineProperties = require('terriajs-cesium/Source/Core/defineProperties');
var inherit = require('../Core/inherit');
var CatalogItem = require('./CatalogItem');

/**
 * A {@link CatalogItem} representing CSV data.
 *
 * @alias CsvCatalogItem
 * @constructor
 * @extends CatalogItem
 */
var CsvCatalogItem = function(terria, url) {
    CatalogItem.call(this, terria);

    /**
     * Gets or sets the URL from which to retrieve CSV data.
     * @type {String}
     */
    this.csvCatalogItemUrl = url;

    /**
     * Gets or sets the template used to display feature info.
     * @type {String}
     */
    this.featureInfoTemplate = undefined;
};

inherit(CatalogItem, CsvCatalogItem);

defineProperties(CsvCatalogItem.prototype, {
    type : {
        get : function() {
            return 'csv';
        }
    },

    typeName : {
        get : function() {
            return 'Comma-Separated Values (CSV)';
        }
    }
});

module.exports = CsvCatalogItem;
"""

BROKEN_CATALOG_ITEM = """
'use strict';

/**
 * An item whose parent is never registered.
 *
 * @alias BrokenCatalogItem
 * @constructor
 */
var BrokenCatalogItem = function(terria) {
    /**
     * @type {String}
     */
    this.url = undefined;
};

module.exports = BrokenCatalogItem;
"""

STANDARD_MODELS = {
    "CatalogMember.js": CATALOG_MEMBER,
    "CatalogItem.js": CATALOG_ITEM,
    "CatalogGroup.js": CATALOG_GROUP,
    "ImageryLayerCatalogItem.js": IMAGERY_LAYER_CATALOG_ITEM,
    "WebMapServiceCatalogItem.js": WEB_MAP_SERVICE_CATALOG_ITEM,
    "CsvCatalogItem.js": CSV_CATALOG_ITEM,
}


class CatalogBuilder:
    """Utility for writing a throwaway source package full of model files."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "source"
        self.root.mkdir()
        self.models = self.root / "lib" / "Models"
        self.models.mkdir(parents=True)
        self.dest = tmp_path / "out"
        self.dest.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the source root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_models(self, models: Mapping[str, str] | None = None) -> None:
        """Write model files into the model directory (the standard set by default)."""
        models = STANDARD_MODELS if models is None else models
        self.write({f"lib/Models/{name}": content for name, content in models.items()})

    def write_package(self, version: str = "1.2.3") -> None:
        self.write({"package.json": json.dumps({"name": "terriajs", "version": version})})

    def model_path(self, name: str) -> Path:
        return self.models / name

    def config(self, **overrides: object) -> RunConfig:
        """Return a run configuration pointed at this tree."""
        settings: dict[str, object] = {
            "source": self.root,
            "dest": self.dest,
            "version_subdir": False,
            "max_workers": 2,
        }
        settings.update(overrides)
        return RunConfig(**settings)  # type: ignore[arg-type]


__all__ = ["CatalogBuilder", "STANDARD_MODELS"]
