"""
Built-in message catalogs.

Templates use ``{Placeholder}`` tokens. Every rule supplies PropertyName and
PropertyValue; the remaining tokens are rule specific.
"""

ENGLISH_MESSAGES: dict[str, str] = {
    "NotNull": "{PropertyName} must not be null",
    "NotEmpty": "{PropertyName} must not be empty",
    "Empty": "{PropertyName} must be empty",
    "Length": "{PropertyName} must be between {MinLength} and {MaxLength} characters",
    "MinLength": "{PropertyName} must be at least {MinLength} characters",
    "MaxLength": "{PropertyName} must be {MaxLength} characters or fewer",
    "ExactLength": "{PropertyName} must be exactly {MinLength} characters",
    "Regex": "{PropertyName} is not in the correct format",
    "Email": "{PropertyName} must be a valid email address",
    "CreditCard": "{PropertyName} must be a valid credit card number",
    "Equal": "{PropertyName} must be equal to {ComparisonValue}",
    "NotEqual": "{PropertyName} must not be equal to {ComparisonValue}",
    "GreaterThan": "{PropertyName} must be greater than {ComparisonValue}",
    "GreaterThanOrEqual": "{PropertyName} must be greater than or equal to {ComparisonValue}",
    "LessThan": "{PropertyName} must be less than {ComparisonValue}",
    "LessThanOrEqual": "{PropertyName} must be less than or equal to {ComparisonValue}",
    "Between": "{PropertyName} must be within {Range}",
    "InclusiveBetween": "{PropertyName} must be between {From} and {To}",
    "ExclusiveBetween": "{PropertyName} must be between {From} and {To} (exclusive)",
    "Predicate": "{PropertyName} is invalid",
    "AllOf": "{PropertyName} must satisfy every condition",
    "AnyOf": "{PropertyName} must satisfy at least one condition",
    "Url": "{PropertyName} must be a valid URL",
    "HttpsUrl": "{PropertyName} must use HTTPS",
    "PhoneNumber": "{PropertyName} must be a valid phone number",
    "IpAddress": "{PropertyName} must be a valid IP address",
    "IpAddressVersion": "{PropertyName} must not be an IPv{IpVersion} address",
    "Uuid": "{PropertyName} must be a valid UUID",
    "NilUuid": "{PropertyName} must not be the nil UUID",
    "Enum": "{PropertyName} has a range of values which does not include {PropertyValue}",
    "Future": "{PropertyName} must be in the future",
    "FutureOrPresent": "{PropertyName} must be in the future or present",
    "Past": "{PropertyName} must be in the past",
    "PastOrPresent": "{PropertyName} must be in the past or present",
    "After": "{PropertyName} must be after {ComparisonValue}",
    "AfterOrEqual": "{PropertyName} must be after or equal to {ComparisonValue}",
    "Before": "{PropertyName} must be before {ComparisonValue}",
    "BeforeOrEqual": "{PropertyName} must be before or equal to {ComparisonValue}",
    "MinCount": "{PropertyName} must contain at least {Count} items",
    "MaxCount": "{PropertyName} must contain no more than {Count} items",
    "ExactCount": "{PropertyName} must contain exactly {Count} items",
    "Unique": "{PropertyName} must not contain duplicate items",
    "PrecisionScale": (
        "{PropertyName} must not be more than {Precision} digits in total, "
        "with allowance for {Scale} decimals"
    ),
    "Password": "{PropertyName} is not strong enough: {Problems}",
    "Json": "{PropertyName} must be valid JSON",
    "JsonObject": "{PropertyName} must be a JSON object",
    "JsonArray": "{PropertyName} must be a JSON array",
    "JsonDepth": "{PropertyName} must not be nested deeper than {MaxDepth} levels",
    "FileExtension": "{PropertyName} must have one of the following extensions: {Extensions}",
    "FileExtensionMissing": "{PropertyName} must have a file extension",
    "Duration": "{PropertyName} must be a duration",
    "NonZeroDuration": "{PropertyName} must not be a zero duration",
    "NonNegativeDuration": "{PropertyName} must not be a negative duration",
    "MinDuration": "{PropertyName} must be at least {MinDuration}",
    "MaxDuration": "{PropertyName} must be at most {MaxDuration}",
    "Color": "{PropertyName} must be a valid color",
}

TURKISH_MESSAGES: dict[str, str] = {
    "NotEmpty": "{PropertyName} boş olamaz",
    "Length": "{PropertyName} {MinLength} ile {MaxLength} karakter arasında olmalıdır",
    "Email": "{PropertyName} geçerli bir e-posta adresi olmalıdır",
    "CreditCard": "{PropertyName} geçerli bir kredi kartı numarası olmalıdır",
    "NotEqual": "{PropertyName} {ComparisonValue} değerine eşit olmamalıdır",
    "GreaterThan": "{PropertyName} {ComparisonValue} değerinden büyük olmalıdır",
    "LessThan": "{PropertyName} {ComparisonValue} değerinden küçük olmalıdır",
    "InclusiveBetween": "{PropertyName} {From} ile {To} arasında olmalıdır",
    "Regex": "{PropertyName} doğru formatta değil",
    "Predicate": "{PropertyName} geçersiz",
    "Password": "{PropertyName} yeterince güçlü değil: {Problems}",
    "Json": "{PropertyName} geçerli bir JSON olmalıdır",
    "JsonObject": "{PropertyName} bir JSON nesnesi olmalıdır",
    "JsonArray": "{PropertyName} bir JSON dizisi olmalıdır",
    "JsonDepth": "{PropertyName} en fazla {MaxDepth} seviye iç içe olabilir",
    "FileExtension": "{PropertyName} şu uzantılardan birine sahip olmalıdır: {Extensions}",
    "FileExtensionMissing": "{PropertyName} bir dosya uzantısına sahip olmalıdır",
    "Duration": "{PropertyName} bir süre olmalıdır",
    "NonZeroDuration": "{PropertyName} sıfır olmamalıdır",
    "NonNegativeDuration": "{PropertyName} negatif olmamalıdır",
    "MinDuration": "{PropertyName} en az {MinDuration} olmalıdır",
    "MaxDuration": "{PropertyName} en fazla {MaxDuration} olmalıdır",
    "Color": "{PropertyName} geçerli bir renk olmalıdır",
}

DEFAULT_CATALOGS: dict[str, dict[str, str]] = {
    "en": ENGLISH_MESSAGES,
    "tr": TURKISH_MESSAGES,
}
