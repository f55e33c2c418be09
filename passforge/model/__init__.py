from passforge.model.enums import Alignment, BarcodeFormat, DateTimeStyle, NumberStyle, TransitType
from passforge.model.types import (
	DEFAULT_MESSAGE_ENCODING,
	PASS_TYPE_VARIANTS,
	Barcode,
	BoardingPass,
	Coupon,
	EventTicket,
	GenericPass,
	Location,
	Pass,
	PassContent,
	PassDate,
	PassDouble,
	PassField,
	PassInt,
	PassText,
	PassType,
	PassValue,
	RGBColor,
	StoreCard,
	WebService,
	mk_barcode,
	mk_simple_field,
	rgb,
	update_barcode,
)

__all__ = [
	"Alignment",
	"Barcode",
	"BarcodeFormat",
	"BoardingPass",
	"Coupon",
	"DEFAULT_MESSAGE_ENCODING",
	"DateTimeStyle",
	"EventTicket",
	"GenericPass",
	"Location",
	"NumberStyle",
	"PASS_TYPE_VARIANTS",
	"Pass",
	"PassContent",
	"PassDate",
	"PassDouble",
	"PassField",
	"PassInt",
	"PassText",
	"PassType",
	"PassValue",
	"RGBColor",
	"StoreCard",
	"TransitType",
	"WebService",
	"mk_barcode",
	"mk_simple_field",
	"rgb",
	"update_barcode",
]
