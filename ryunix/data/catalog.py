"""
Static base catalog.

Archetype decks and staple cards with their base meta ratings. Admin edits
never rewrite this data; they are layered on top by the catalog overlay.
Artwork comes from the YGOPRODeck image CDN, keyed by a representative card id.
"""

from ryunix.models.catalog import CatalogItem, Rating, price_for_rating

CARD_IMAGE_BASE = "https://images.ygoprodeck.com/images/cards_small"


def card_image_url(card_id: int) -> str:
    return f"{CARD_IMAGE_BASE}/{card_id}.jpg"


def _item(name: str, rating: str, card_id: int) -> CatalogItem:
    r = Rating(rating)
    return CatalogItem(
        name=name, rating=r, price=price_for_rating(r), image_url=card_image_url(card_id)
    )


# (name, rating, representative card id)
_ARCHETYPES: list[tuple[str, str, int]] = [
    ("Albaz", "S", 59977691),
    ("Abyss Actor", "C", 19474136),
    ("Adamancipator", "B", 25174609),
    ("Adventurer Token", "A", 57304293),
    ("Aesir", "D", 63767246),
    ("Agent", "B", 91188343),
    ("Alien", "D", 23064373),
    ("Ally of Justice", "F", 6051314),
    ("Altergeist", "A", 1984618),
    ("Amazemment", "C", 90582792),
    ("Amazoness", "D", 67987611),
    ("Amorphage", "D", 7545997),
    ("Ancient Gear", "C", 10509340),
    ("Ancient Warriors", "B", 13734034),
    ("Appliancer", "F", 72475938),
    ("Aquaactress", "F", 62329294),
    ("Arcana Force", "F", 6150044),
    ("Archfiend", "D", 58551308),
    ("Armed Dragon", "C", 87706553),
    ("Aroma", "C", 92266279),
    ("Artifact", "B", 53639887),
    ("Artmage", "C", 27184601),
    ("Ashened", "B", 59019082),
    ("Assault Mode", "D", 61257789),
    ("Atlantean", "A", 29802344),
    ("Batteryman", "D", 52584282),
    ("Battlewasp", "D", 94380860),
    ("Battlin Boxer", "C", 21352426),
    ("Beetrooper", "B", 51068233),
    ("Black Luster", "C", 5405694),
    ("Black Rose Dragon", "B", 73580471),
    ("Blackwing", "A", 14785765),
    ("Blue-Eyes", "C", 89631139),
    ("Bounzer", "D", 26585525),
    ("Bujin", "D", 37742478),
    ("Burning Abyss", "B", 15341821),
    ("Buster Blader", "C", 78193831),
    ("Butterspy", "F", 88580318),
    ("Bystial", "S", 92107604),
    ("Centur-Ion", "S", 62325062),
    ("Charmer", "C", 81983656),
    ("Chaos", "B", 72426662),
    ("Chemicritter", "F", 79108553),
    ("Chronomaly", "D", 63125616),
    ("Chrysalis", "F", 98189471),
    ("Cipher", "D", 24418328),
    ("Cloudian", "F", 89142907),
    ("Code Talker", "A", 1861629),
    ("Constellar", "C", 86510128),
    ("Crusadia", "B", 45935582),
    ("Crystal Beast", "B", 52953359),
    ("Crystron", "A", 50588353),
    ("Cubic", "D", 30270176),
    ("Cyber", "B", 70095154),
    ("Cyberdark", "C", 32409892),
    ("Cyber Dragon", "B", 70095154),
    ("D.D.", "D", 15939229),
    ("D/D", "B", 56665521),
    ("Danger!", "B", 45513819),
    ("Darklord", "C", 76901856),
    ("Dark Magician", "C", 46986414),
    ("Dark Scorpion", "F", 68871309),
    ("Dark World", "A", 26883643),
    ("Deep Sea", "B", 43096270),
    ("Deskbot", "D", 44749927),
    ("Despia", "S", 33909817),
    ("Destiny Hero", "A", 60461804),
    ("Digital Bug", "F", 21286575),
    ("Dinomist", "D", 52544156),
    ("Dinomorphia", "A", 92798873),
    ("Dinowrestler", "F", 40546238),
    ("Dododo", "D", 70946699),
    ("Dogmatika", "A", 95679145),
    ("Doodle Beast", "F", 31230289),
    ("DoomZ", "C", 95626382),
    ("Dracoslayer", "A", 65711558),
    ("Dracotail", "B", 33760966),
    ("Dragon Ruler", "C", 69610924),
    ("Dragonmaid", "B", 36905639),
    ("Dragunity", "B", 22456768),
    ("Dream Mirror", "D", 78662923),
    ("Drytron", "A", 22398665),
    ("Dual Avatar", "D", 74801968),
    ("Duston", "F", 2947913),
    ("Earthbound", "D", 91712985),
    ("Edge Imp", "C", 59203905),
    ("Edlich", "A", 2530830),
    ("Elemental Hero", "B", 35809262),
    ("Elementsaber", "D", 55102269),
    ("Empowered Warrior", "F", 58649699),
    ("Endymion", "A", 40732515),
    ("Enneacraft", "C", 54842941),
    ("Evil Eye", "B", 83389291),
    ("Evil Hero", "B", 87132491),
    ("Evil Twin / Live Twin", "A", 79965360),
    ("Evilswarm", "D", 72107190),
    ("Evoltile", "F", 14391920),
    ("Exosister", "A", 39084753),
    ("Eyes Restrict", "C", 4551290),
    ("Fabled", "D", 99188141),
    ("Face Cards", "D", 14816857),
    ("F.A.", "D", 23950192),
    ("Fairy Tail", "C", 17499454),
    ("Familiar-Possessed", "C", 48788985),
    ("Fiendsmith", "B", 2463794),
    ("Brotherhood of the Fire Fist", "C", 25974644),
    ("Fire King", "S", 12375043),
    ("Fire Warrior", "D", 66766616),
    ("Flame Swordsman", "D", 66766616),
    ("Flamvell", "F", 52335694),
    ("Fleur", "B", 80223393),
    ("Floowandereeze", "A", 52015072),
    ("Flower Cardian", "F", 67952296),
    ("Fluffal", "B", 18144507),
    ("Forbidden One (Exodia)", "D", 33396948),
    ("Fortune Fairy", "D", 43877193),
    ("Fortune Lady", "C", 31791910),
    ("Fossil Fusion", "C", 12829629),
    ("Frightfur", "B", 34124316),
    ("Frog", "B", 99916754),
    ("Fur Hire", "C", 55790359),
    ("G Golem", "D", 61668670),
    ("Gadget", "D", 86445415),
    ("Gagaga", "D", 12014404),
    ("Gaia", "C", 6368038),
    ("Galaxy", "B", 28352947),
    ("Ganbara", "F", 3797274),
    ("Gate Guardian", "C", 25833572),
    ("Gearfried", "D", 423705),
    ("Geargia", "C", 36952911),
    ("Gem-", "B", 37849889),
    ("Generaider", "A", 3981282),
    ("Genex", "F", 53701621),
    ("Ghostrick", "C", 4939890),
    ("Ghoti", "A", 99901451),
    ("Gimmick Puppet", "C", 52653092),
    ("Gishki", "B", 31782758),
    ("Glacial Beast", "F", 43175027),
    ("Gladiator Beast", "C", 17412721),
    ("Goblin", "D", 45894482),
    ("Goblin Biker", "B", 34001672),
    ("Gogogo", "D", 41337090),
    ("Gold Pride", "A", 17711092),
    ("Gorgonic", "F", 59116088),
    ("Gouki", "B", 40636712),
    ("Goyo", "D", 84224627),
    ("Gravekeeper", "C", 45894482),
    ("Graydle", "D", 26676809),
    ("Gunkan", "B", 45513819),
    ("Gusto", "D", 25159454),
    ("Harpie", "B", 80316585),
    ("Hazy Flame", "F", 11467854),
    ("Hecahands", "C", 95365081),
    ("Heraldic Beast", "D", 8310412),
    ("Heroic", "C", 22404675),
    ("Hieratic", "C", 88177324),
    ("Horus", "B", 89430469),
    ("Ice Barrier", "B", 50321796),
    ("Icejade", "B", 21652754),
    ("Igknight", "D", 11665426),
    ("Ignister", "A", 45286100),
    ("Impcantation", "C", 64631466),
    ("Infernity", "C", 10802915),
    ("Infernoble", "A", 4423206),
    ("Infernoid", "B", 81262671),
    ("Infinitrack", "B", 23935886),
    ("Invoked", "A", 86120751),
    ("Inzektor", "C", 27381364),
    ("Iron Chain", "F", 98612011),
    ("Junk", "B", 63977008),
    ("Jurrac", "F", 21263083),
    ("K9", "B", 92248362),
    ("Kaiju", "A", 10389142),
    ("Karakuri", "C", 23280399),
    ("Kashtira", "S", 9272381),
    ("Kewl Tune", "C", 16387555),
    ("Knightmare", "A", 68304193),
    ("Koa'ki Meiru", "D", 24430813),
    ("Kozmo", "C", 24550676),
    ("Krawler", "D", 56649609),
    ("Kuriboh", "F", 40640057),
    ("Labrynth", "S", 71490127),
    ("Laval", "D", 6093970),
    ("Libromancer", "B", 23211961),
    ("Lightray", "F", 49904606),
    ("Lightsworn", "B", 22624373),
    ("Lswarm", "D", 72107190),
    ("Lunalight", "B", 45426429),
    ("Lyrilusc", "A", 8491961),
    ("Machina", "B", 58110717),
    ("Madolche", "A", 84624099),
    ("Magical Musket", "B", 31421177),
    ("Magician", "C", 46986414),
    ("Magikey", "B", 2637162),
    ("Magistus", "C", 51608596),
    ("Majespecter", "B", 94664194),
    ("Malefic", "D", 52558805),
    ("Maliss", "B", 69272449),
    ("Mannadium", "S", 60215682),
    ("Marincess", "A", 3199870),
    ("Masked HERO", "B", 58481572),
    ("Materiactor", "D", 70597485),
    ("Mathmech", "S", 14804304),
    ("Mayakashi", "C", 4932642),
    ("Mecha Phantom Beast", "C", 85318156),
    ("Megalith", "C", 33334941),
    ("Mekk-Knight", "B", 70594470),
    ("Meklord", "D", 99365553),
    ("Melffy", "B", 31129579),
    ("Melodious", "B", 64880894),
    ("Memento", "A", 54550967),
    ("Mermail", "A", 74371660),
    ("Metalfoes", "B", 27279764),
    ("Metalmorph", "C", 89812483),
    ("Metaphys", "D", 98351855),
    ("Mikanko", "A", 76339638),
    ("Millennium", "C", 37613663),
    ("Mimighoul", "B", 55537983),
    ("Mist Valley", "D", 10308470),
    ("Mitsurugi", "B", 19899073),
    ("Monarch", "C", 25010609),
    ("Morphtronic", "C", 45587643),
    ("Mystical Beast", "D", 97317530),
    ("Mystical Space Typhoon", "C", 5318639),
    ("Mythical Beast", "C", 78428103),
    ("Myutant", "B", 56805528),
    ("Naturia", "A", 33198837),
    ("Nekroz", "B", 90307498),
    ("Nemleria", "C", 70155677),
    ("Neo-Spacian", "D", 58932615),
    ("Neos", "B", 89943723),
    ("Nemeses", "C", 78966799),
    ("Nephthys", "D", 61441708),
    ("Nimble", "D", 48919900),
    ("Ninja", "B", 88256900),
    ("Noble Knight", "C", 75016135),
    ("Nordic", "D", 63767246),
    ("Nouvelles", "B", 88890658),
    ("Number", "C", 39512984),
    ("Numeron", "B", 88177324),
    ("Odd-Eyes", "B", 16178681),
    ("Ogdoadic", "C", 37640707),
    ("Orcust", "A", 30741503),
    ("Ojama", "D", 64163367),
    ("P.U.N.K.", "A", 56536933),
    ("Paleozoic", "B", 41041015),
    ("Parshath", "C", 11026303),
    ("Penguin", "B", 93920745),
    ("Performage", "C", 68319013),
    ("Performapal", "B", 35929350),
    ("Phantasm Spiral", "C", 42625254),
    ("Phantom Beast", "D", 6007213),
    ("Photon", "B", 28352947),
    ("Plunder Patroll", "A", 62858086),
    ("Prank-Kids", "B", 8591267),
    ("Predaplant", "B", 92405064),
    ("Prediction Princess", "D", 70583269),
    ("Purrely", "S", 86289965),
    ("PSY-Framegear", "B", 38517810),
    ("Psychic", "C", 97604505),
    ("Qli", "C", 90885155),
    ("R.B.", "B", 32216688),
    ("Ragnaraika", "B", 99153051),
    ("Raidraptor", "A", 67805911),
    ("Red-Eyes", "C", 74677422),
    ("Regenesis", "B", 22812963),
    ("Reptilianne", "C", 29119130),
    ("Rescue-ACE", "S", 39149096),
    ("Resonator", "B", 28039460),
    ("Rikka", "A", 39370594),
    ("Risebell", "D", 45103815),
    ("Ritual Beast", "C", 77538911),
    ("Roid", "D", 65957473),
    ("Rokket", "A", 62873545),
    ("Rose", "C", 73580471),
    ("Runick", "A", 87999632),
    ("Ryu-Ge", "B", 92487128),
    ("Ryzeal", "B", 34909328),
    ("Sangen", "C", 18969888),
    ("S-Force", "C", 37629703),
    ("Salamangreat", "A", 55622560),
    ("Scareclaw", "A", 55124257),
    ("Scrap", "C", 93537012),
    ("Shaddoll", "A", 74822425),
    ("Shark", "B", 87511638),
    ("Shining Sarcophagus", "B", 79791878),
    ("Shinobird", "D", 13510476),
    ("Shiranui", "C", 65681983),
    ("Silent Magician", "C", 72443568),
    ("Silent Swordsman", "C", 43722862),
    ("Simorgh", "D", 14989021),
    ("Sinful Spoils", "S", 80845034),
    ("Six Samurai", "C", 2511717),
    ("Skull Servant", "C", 32274490),
    ("Sky Striker", "A", 63288573),
    ("Snake-Eye", "S", 59460374),
    ("Solfachord", "C", 52212128),
    ("Speedroid", "B", 85852291),
    ("Spellbook", "C", 89631139),
    ("Spellcaster", "C", 46986414),
    ("Sphinx", "D", 4931562),
    ("Springan", "B", 21887175),
    ("Spyral", "B", 17692067),
    ("Spright", "S", 72656408),
    ("Star Seraph", "D", 38331564),
    ("Starry Knight", "C", 95816359),
    ("Steelswarm", "D", 30495779),
    ("Subterror", "B", 41909653),
    ("Sunavalon", "A", 61649111),
    ("Superheavy Samurai", "A", 93189170),
    ("Supreme King", "B", 23064373),
    ("Swordsoul", "A", 4810828),
    ("Sylvan", "D", 10530913),
    ("Symphonic Warrior", "D", 85663174),
    ("Synchron", "B", 63977008),
    ("Tearlaments", "S", 81733838),
    ("Tellarknight", "C", 22171189),
    ("Tenyi", "A", 87052196),
    ("T.G.", "B", 72012029),
    ("The Agent", "B", 91188343),
    ("The Phantom Knights", "A", 2857636),
    ("The Weather", "B", 51892507),
    ("Therion", "A", 71832012),
    ("Thunder Dragon", "B", 21214648),
    ("Time Thief", "B", 55285840),
    ("Timelord", "C", 67493622),
    ("Tindangle", "D", 59438930),
    ("Tistina", "C", 86999951),
    ("Toon", "C", 15259703),
    ("Toy", "C", 65504487),
    ("Traptrix", "A", 2956282),
    ("Triamid", "C", 98283955),
    ("Tri-Brigade", "A", 92326786),
    ("Trickstar", "B", 18440051),
    ("True King", "C", 52340444),
    ("Twilightsworn", "C", 45425051),
    ("U.A.", "C", 97445262),
    ("Unchained", "S", 13494),
    ("Ursarctic", "C", 93872921),
    ("Utopia", "B", 39512984),
    ("Vaalmonica", "B", 3048768),
    ("Vampire", "C", 59575939),
    ("Vanquish Soul", "S", 38352607),
    ("Vassal", "D", 59808784),
    ("Vaylantz", "A", 41875100),
    ("Vendread", "C", 78316831),
    ("Venom", "D", 28563545),
    ("Virtual World", "B", 11510448),
    ("Visas Starfrost", "A", 5665661),
    ("Vision HERO", "B", 47732619),
    ("Voiceless Voice", "S", 3232684),
    ("Volcanic", "A", 54991569),
    ("Vylon", "D", 17403969),
    ("War Rock", "D", 87630389),
    ("Watt", "D", 81605604),
    ("White Forest", "B", 14307929),
    ("Wind-up", "C", 48739166),
    ("Windwitch", "B", 14471899),
    ("Witchcrafter", "B", 80560969),
    ("World Chalice", "C", 19950507),
    ("World Legacy", "B", 42201154),
    ("Worm", "D", 54866514),
    ("Xtra HERO", "B", 50076009),
    ("Xyz", "C", 39512984),
    ("X-Saber", "C", 45206713),
    ("Yang Zing", "C", 66498018),
    ("Yosenju", "C", 65247798),
    ("Yubel", "A", 78371393),
    ("Yummy", "C", 30581601),
    ("Zefra", "B", 19260656),
    ("Zombie", "A", 51570882),
    ("Zoodiac", "B", 48905153),
    ("Zubaba", "D", 43129306),
    ("ZW -", "D", 49705790),
    ("Blue-Eyes White Dragon", "C", 89631139),
    ("Gaia The Fierce Knight", "C", 6368038),
    ("Celtic Guard", "D", 39507162),
    ("Umi", "C", 22702055),
    ("Trap Hole", "B", 4206964),
    ("Fusion", "C", 24094653),
    ("Red-Eyes Black Dragon", "C", 74677422),
    ("Pot of Greed", "F", 55144522),
    ("Battleguard", "D", 47303359),
    ("Summoned Skull", "C", 70781052),
    ("Jinzo", "C", 77585513),
    ("Gun Dragons - Barrel Dragon", "C", 81480460),
    ("Solemn Cards", "S", 41420027),
    ("Mirror Force", "B", 44095762),
    ("Ritual", "C", 64631466),
    ("Relinquished", "C", 64631466),
    ("Jar", "D", 34469589),
    ("The Legendary Fisherman", "C", 3643300),
    ("Gradius - Spaceships", "D", 10992251),
    ("Slime", "C", 41392891),
    ("Masked Beast", "D", 49064413),
    ("Dark Necrofear", "C", 31829185),
    ("Destiny Board", "D", 94212438),
    ("Spirit", "D", 30316964),
    ("Magician Girl", "C", 38033121),
    ("X-Y-Z Union", "C", 65622692),
    ("Koala", "D", 42129512),
    ("Guardians", "D", 89272878),
    ("Maju", "C", 98094467),
    ("Zera", "D", 69123138),
    ("B.E.S.", "C", 44330098),
    ("Mokey Mokey", "F", 27288416),
    ("Chthonian", "D", 39618779),
    ("End of the World", "C", 91949988),
    ("Majestic Mech", "D", 39012891),
    ("Counter Trap Fairies", "B", 51408546),
    ("Gemini", "D", 97392604),
    ("Bamboo Sword", "D", 23456620),
    ("Felgrand", "C", 25533642),
    ("Attribute Knight", "D", 54478211),
    ("Magnet Warrior", "C", 89399912),
    ("Reactor", "D", 49587034),
    ("Puppet", "D", 15001619),
    ("Jester", "D", 62503101),
    ("Dinossaur", "C", 52038441),
    ("Spider", "D", 17494901),
    ("Baboons", "D", 46801932),
    ("Clear World", "D", 68996298),
    ("Inca", "D", 25397377),
    ("Temple of the Kings", "C", 29762407),
    ("Wicked Gods", "C", 82219645),
    ("Egyptian Gods", "C", 89631139),
    ("Crashbug", "F", 86804246),
    ("Hunder", "D", 41420027),
    ("Railway / Trains", "A", 35094006),
    ("Sparrow Family", "F", 46986414),
    ("Malicevorous", "D", 5911493),
    ("Legendary Knight", "C", 68796350),
    ("Legendary Dragon", "C", 46232525),
    ("Hand", "B", 55256016),
    ("Dragoons of Draconia", "D", 78015762),
    ("Clear Wing Dragon", "B", 82044279),
    ("Elder Entity", "C", 20590513),
    ("Steel Cavalry", "D", 2396042),
    ("Twilight Ninja", "C", 21375642),
    ("Super Quant", "B", 20366274),
    ("Dracoverlord", "B", 81439173),
    ("Aether", "C", 80344569),
    ("Legendary Planet", "D", 52605700),
    ("Electromagnet Warrior", "C", 15006126),
    ("White Aura", "C", 72413000),
    ("Borrel", "A", 62873545),
    ("Martial Arts Spirits", "D", 46986414),
    ("Topologic", "A", 23935886),
    ("Cataclysmic", "D", 62850093),
    ("Fossil Warrior", "C", 12829629),
    ("Vernusylph", "A", 37897148),
    ("Ancient Treasure", "D", 7903368),
    ("Bolt Star", "D", 99991455),
    ("Transcendosaurus", "C", 31241087),
    ("Illusion", "B", 38264974),
    ("King's Sarcophagus", "A", 16528181),
    ("Earthbound Servant", "C", 71101678),
    ("Veda", "C", 40785230),
    ("Tenpai", "S", 39931513),
    ("Max Metalmorph", "C", 29157292),
    ("Primite", "B", 81418467),
    ("Azamina", "B", 73391962),
    ("Mulcharmy", "S+", 84192580),
    ("Argostars", "B", 40706444),
    ("Dominus", "B", 42091632),
    ("Power Patron", "C", 68231287),
    ("WAKE CUP!", "D", 85586937),
    ("CXyz", "B", 6165656),
    ('"C"', "S", 23434538),
]

_STAPLES: list[tuple[str, str, int]] = [
    ("Ash Blossom & Joyous Spring", "S", 14558127),
    ("Effect Veiler", "A", 97268402),
    ("Infinite Impermanence", "S", 10045474),
    ("Nibiru, the Primal Being", "S", 27204311),
    ("Droll & Lock Bird", "S", 94145021),
    ("Ghost Ogre & Snow Rabbit", "A", 59438930),
    ("Ghost Belle & Haunted Mansion", "S", 73642296),
    ("Ghost Mourner & Moonlit Chill", "S", 52038441),
    ("D.D. Crow", "B", 24508238),
    ("Dimension Shifter", "S", 91800273),
    ("Artifact Lancea", "S", 34267821),
    ("Skull Meister", "S", 97268402),
    ("Lightning Storm", "S", 14532163),
    ("Raigeki", "B", 12580477),
    ("Dark Hole", "B", 53129443),
    ("Harpie's Feather Duster", "S", 18144506),
    ("Evenly Matched", "S", 15693423),
    ("Dark Ruler No More", "S", 54693926),
    ("Forbidden Droplet", "S", 24299458),
    ("Book of Eclipse", "B", 35480699),
    ("Book of Moon", "B", 14087893),
    ("Super Polymerization", "S", 48130397),
    ("Called by the Grave", "S", 24224830),
    ("Crossout Designator", "S", 65681983),
    ("Pot of Prosperity", "A", 84211599),
    ("Pot of Desires", "A", 35261759),
    ("Small World", "C", 42110604),
    ("Terraforming", "B", 73628505),
    ("Foolish Burial", "S", 81439173),
    ("Monster Reborn", "S", 83764718),
    ("One for One", "S", 2295440),
    ("Cosmic Cyclone", "B", 8267140),
    ("Twin Twisters", "B", 43898403),
    ("Forbidden Chalice", "B", 25789292),
    ("Forbidden Lance", "B", 27243130),
    ("Solemn Judgment", "A", 41420027),
    ("Solemn Strike", "A", 40605147),
    ("Solemn Warning", "A", 84749824),
    ("Red Reboot", "S", 51447164),
    ("Dimensional Barrier", "S", 83326048),
    ("Anti-Spell Fragrance", "S", 58921041),
    ("There Can Be Only One", "S", 24207889),
    ("Rivalry of Warlords", "S", 90846359),
    ("Gozen Match", "S", 53334471),
    ("Skill Drain", "S", 82732705),
]

ARCHETYPE_DECKS: list[CatalogItem] = [_item(*row) for row in _ARCHETYPES]
STAPLE_CARDS: list[CatalogItem] = [_item(*row) for row in _STAPLES]
